from datetime import datetime, timezone

from beanie import Document, Indexed, Insert, Replace, Save, Update, before_event
from pydantic import Field
from pymongo import IndexModel

from healthwatch.shared.constants import Role


class Profile(Document):
    """Community member profile. Officials double as authors of automatic alerts."""

    user_id: Indexed(str, unique=True)  # type: ignore
    name: str
    email: str
    role: Role
    village: str

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @before_event(Insert, Replace, Save, Update)
    def update_updated_at(self) -> None:
        self.updated_at = datetime.now(timezone.utc)

    class Settings:
        name = "profiles"
        indexes = [IndexModel([("role", 1), ("created_at", 1)])]
