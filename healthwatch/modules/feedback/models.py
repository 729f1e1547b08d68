from datetime import datetime, timezone
from typing import Optional

from beanie import Document, Insert, Replace, Save, Update, before_event
from pydantic import Field
from pymongo import IndexModel

from healthwatch.shared.constants import FeedbackStatus, Role


class Feedback(Document):
    """Community feedback addressed to officials."""

    submitted_by: str
    village: str
    message: str
    status: FeedbackStatus = FeedbackStatus.PENDING
    response: Optional[str] = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @before_event(Insert, Replace, Save, Update)
    def update_updated_at(self) -> None:
        self.updated_at = datetime.now(timezone.utc)

    class Settings:
        name = "feedback"
        indexes = [IndexModel([("village", 1), ("created_at", -1)])]


class EducationContent(Document):
    """Health education material shown to a single role."""

    title: str
    content: str
    category: str = "general"
    target_role: Role
    priority: int = 0
    image_url: Optional[str] = None
    is_active: bool = True

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @before_event(Insert, Replace, Save, Update)
    def update_updated_at(self) -> None:
        self.updated_at = datetime.now(timezone.utc)

    class Settings:
        name = "education_content"
        indexes = [IndexModel([("target_role", 1), ("priority", -1)])]
