from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator

from healthwatch.shared.constants import OFFLINE_CHANNELS, RiskLevel, SubmissionChannel
from healthwatch.shared.schemas import CamelModel, CamelReadModel


class ReportCreate(CamelModel):
    """Inbound payload for a symptom report."""

    patient_name: str = Field(min_length=1, max_length=200)
    village: str = Field(min_length=1, max_length=200)
    symptoms: str = Field(min_length=1, max_length=500)
    water_source: str = "Unknown"
    submitted_via: SubmissionChannel = SubmissionChannel.ONLINE
    submitter_id: str = Field(min_length=1)
    age: Optional[int] = Field(default=None, ge=0, le=150)

    @field_validator("patient_name", "village", "symptoms", "water_source")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("value cannot be blank")
        return value


class OfflineReportUpload(ReportCreate):
    """A report queued on a device while offline, uploaded during sync."""

    client_id: str = Field(min_length=1, description="Device-side id of the queued report")
    submitted_via: SubmissionChannel = SubmissionChannel.OFFLINE_VILLAGER
    created_at: Optional[datetime] = None

    @field_validator("submitted_via")
    @classmethod
    def ensure_offline_channel(cls, value: SubmissionChannel) -> SubmissionChannel:
        if value not in OFFLINE_CHANNELS:
            raise ValueError("submittedVia must be an offline or SMS channel")
        return value

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_epoch_timestamp(cls, value: object) -> object:
        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(value, tz=timezone.utc)
        return value


class ReportSyncRequest(CamelModel):
    reports: list[OfflineReportUpload] = Field(default_factory=list)

    @field_validator("reports")
    @classmethod
    def ensure_non_empty(cls, value: list[OfflineReportUpload]) -> list[OfflineReportUpload]:
        if not value:
            raise ValueError("reports list cannot be empty")
        return value


class ReportSyncResponse(CamelModel):
    synced: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)


class SmsReportRequest(CamelModel):
    """Raw SMS relayed by the gateway provider."""

    body: str = Field(min_length=1)
    sender_id: str = Field(min_length=1)
    water_source: str = "Unknown"


class ReportRead(CamelReadModel):
    id: str
    patient_name: str
    village: str
    symptoms: str
    water_source: str
    submitted_via: SubmissionChannel
    submitter_id: str
    age: Optional[int] = None
    created_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value: object) -> object:
        return str(value) if value is not None else value


class ReportListQuery(CamelModel):
    village: Optional[str] = None
    limit: int = Field(default=100, ge=1, le=1000)
    skip: int = Field(default=0, ge=0)


class HotspotQuery(CamelModel):
    days: int = Field(default=7, ge=1, le=90)


class VillageHotspot(CamelModel):
    """Recent case load for one village."""

    village: str
    case_count: int
    most_common_symptom: str
    risk_level: RiskLevel
