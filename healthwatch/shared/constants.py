from enum import Enum


class Role(str, Enum):
    ASHA = "asha"
    OFFICIAL = "official"
    COMMUNITY = "community"
    VILLAGER = "villager"


class SubmissionChannel(str, Enum):
    """How a report reached the backend."""

    ONLINE = "online"
    ONLINE_VILLAGER = "online_villager"
    OFFLINE_VILLAGER = "offline_villager"
    SMS = "SMS"
    SMS_VILLAGER = "SMS_villager"


# Channels a device may queue locally and upload later.
OFFLINE_CHANNELS = frozenset(
    {
        SubmissionChannel.OFFLINE_VILLAGER,
        SubmissionChannel.SMS,
        SubmissionChannel.SMS_VILLAGER,
    }
)


class AlertType(str, Enum):
    DISEASE_CLUSTER = "disease_cluster"
    WATER_QUALITY = "water_quality"
    SEASONAL = "seasonal"


class FeedbackStatus(str, Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"
    RESOLVED = "resolved"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class IssueType(str, Enum):
    """Problems a villager can flag without describing a patient."""

    DIRTY_WATER = "dirty_water"
    MANY_PEOPLE_SICK = "many_people_sick"
    HAND_PUMP_BROKEN = "hand_pump_broken"
    OTHER = "other"
