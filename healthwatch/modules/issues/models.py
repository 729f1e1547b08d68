from datetime import datetime, timezone
from typing import Optional

from beanie import Document, Insert, Replace, Save, Update, before_event
from pydantic import Field
from pymongo import IndexModel

from healthwatch.shared.constants import IssueType


class CommunityIssue(Document):
    """Village-level problem raised by a villager (dirty water, broken pump, ...)."""

    issue_type: IssueType
    description: Optional[str] = None
    village: str
    submitted_by: str

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @before_event(Insert, Replace, Save, Update)
    def update_updated_at(self) -> None:
        self.updated_at = datetime.now(timezone.utc)

    class Settings:
        name = "community_reports"
        indexes = [
            IndexModel([("submitted_by", 1), ("created_at", -1)]),
            IndexModel([("village", 1), ("created_at", -1)]),
        ]
