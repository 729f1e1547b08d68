from datetime import datetime, timezone
from typing import List, Optional

from beanie import Document, Insert, Replace, Save, Update, before_event
from pydantic import Field
from pymongo import IndexModel

from healthwatch.shared.constants import AlertType, Role


class Alert(Document):
    """Broadcast alert, written by an official or by outbreak detection (auto=True)."""

    message: str
    target_roles: List[Role]
    created_by: str
    village: Optional[str] = None
    type: Optional[AlertType] = None
    disease_or_parameter: Optional[str] = None
    value: Optional[float] = None
    auto: bool = False

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @before_event(Insert, Replace, Save, Update)
    def update_updated_at(self) -> None:
        self.updated_at = datetime.now(timezone.utc)

    class Settings:
        name = "alerts"
        indexes = [
            IndexModel([("created_at", -1)]),
            IndexModel(
                [
                    ("village", 1),
                    ("disease_or_parameter", 1),
                    ("auto", 1),
                    ("created_at", -1),
                ]
            ),
            IndexModel([("target_roles", 1), ("created_at", -1)]),
        ]
