from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator

from healthwatch.shared.constants import IssueType
from healthwatch.shared.schemas import CamelModel, CamelReadModel


class IssueCreate(CamelModel):
    issue_type: IssueType
    description: Optional[str] = Field(default=None, max_length=1000)
    village: str = Field(min_length=1, max_length=200)
    submitted_by: str = Field(min_length=1)

    @field_validator("village")
    @classmethod
    def strip_village(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("village cannot be blank")
        return value

    @field_validator("description")
    @classmethod
    def blank_description_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class OfflineIssueUpload(IssueCreate):
    """An issue saved on a device while offline, uploaded during sync."""

    client_id: str = Field(min_length=1, description="Device-side id of the queued issue")
    created_at: Optional[datetime] = None

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_epoch_timestamp(cls, value: object) -> object:
        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(value, tz=timezone.utc)
        return value

    @field_validator("created_at")
    @classmethod
    def ensure_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class IssueSyncRequest(CamelModel):
    issues: list[OfflineIssueUpload] = Field(default_factory=list)

    @field_validator("issues")
    @classmethod
    def ensure_non_empty(cls, value: list[OfflineIssueUpload]) -> list[OfflineIssueUpload]:
        if not value:
            raise ValueError("issues list cannot be empty")
        return value


class IssueSyncResponse(CamelModel):
    synced: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)


class IssueRead(CamelReadModel):
    id: str
    issue_type: IssueType
    description: Optional[str] = None
    village: str
    submitted_by: str
    created_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value: object) -> object:
        return str(value) if value is not None else value
