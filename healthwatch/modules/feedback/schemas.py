from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from healthwatch.shared.constants import FeedbackStatus, Role
from healthwatch.shared.schemas import CamelModel, CamelReadModel


def _stringify_id(value: object) -> object:
    return str(value) if value is not None else value


class FeedbackCreate(CamelModel):
    submitted_by: str = Field(min_length=1)
    village: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1, max_length=1000)

    @field_validator("message")
    @classmethod
    def strip_message(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("message cannot be blank")
        return value


class FeedbackUpdate(CamelModel):
    """Official's reply to a feedback item."""

    status: Optional[FeedbackStatus] = None
    response: Optional[str] = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def ensure_change(self) -> "FeedbackUpdate":
        if self.status is None and self.response is None:
            raise ValueError("status or response is required")
        return self


class FeedbackRead(CamelReadModel):
    id: str
    submitted_by: str
    village: str
    message: str
    status: FeedbackStatus
    response: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value: object) -> object:
        return _stringify_id(value)


class FeedbackListQuery(CamelModel):
    village: Optional[str] = None
    status: Optional[FeedbackStatus] = None
    limit: int = Field(default=100, ge=1, le=1000)


class EducationContentCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    category: str = "general"
    target_role: Role
    priority: int = Field(default=0, ge=0)
    image_url: Optional[str] = None


class EducationContentRead(CamelReadModel):
    id: str
    title: str
    content: str
    category: str
    target_role: Role
    priority: int
    image_url: Optional[str] = None
    is_active: bool
    created_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value: object) -> object:
        return _stringify_id(value)
