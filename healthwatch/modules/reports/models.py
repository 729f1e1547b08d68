from datetime import datetime, timezone
from typing import Optional

from beanie import Document, Insert, Replace, Save, Update, before_event
from pydantic import Field
from pymongo import IndexModel

from healthwatch.shared.constants import SubmissionChannel


class Report(Document):
    """Symptom report submitted by a field worker or villager."""

    patient_name: str
    village: str
    symptoms: str
    water_source: str = "Unknown"
    submitted_via: SubmissionChannel = SubmissionChannel.ONLINE
    submitter_id: str
    age: Optional[int] = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @before_event(Insert, Replace, Save, Update)
    def update_updated_at(self) -> None:
        self.updated_at = datetime.now(timezone.utc)

    class Settings:
        name = "reports"
        indexes = [
            IndexModel([("village", 1), ("created_at", -1)]),
            IndexModel([("village", 1), ("symptoms", 1), ("created_at", -1)]),
        ]
