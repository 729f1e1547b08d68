from dataclasses import dataclass, field
from datetime import datetime

from healthwatch.shared.constants import AlertType, Role


@dataclass(frozen=True)
class ReportTrigger:
    """The just-submitted report that outbreak detection is keyed on."""

    village: str
    symptoms: str


@dataclass
class AlertCandidate:
    village: str
    type: AlertType
    message: str
    disease_or_parameter: str
    value: float
    target_roles: list[Role] = field(default_factory=list)


@dataclass
class ReportQuery:
    created_after: datetime
    village: str | None = None
    symptoms: str | None = None
    symptoms_contains_any_of: list[str] | None = None


@dataclass
class SensorQuery:
    """Readings after `created_after` breaching either bound (bounds are OR-ed)."""

    created_after: datetime
    ph_below: float | None = None
    turbidity_above: float | None = None


@dataclass
class AlertQuery:
    village: str | None = None
    disease_or_parameter: str | None = None
    auto: bool | None = None
    created_after: datetime | None = None
    target_role: Role | None = None


@dataclass
class ProfileQuery:
    role: Role
