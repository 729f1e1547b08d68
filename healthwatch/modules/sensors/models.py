from datetime import datetime, timezone

from beanie import Document
from pydantic import Field
from pymongo import IndexModel


class SensorReading(Document):
    """Water-quality sample from a village sensor. pH is unitless, turbidity in NTU."""

    village: str
    ph: float
    turbidity: float
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Settings:
        name = "sensors"
        indexes = [
            IndexModel([("created_at", -1)]),
            IndexModel([("village", 1), ("created_at", -1)]),
        ]
