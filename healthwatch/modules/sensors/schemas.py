from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator

from healthwatch.shared.schemas import CamelModel, CamelReadModel


class SensorReadingCreate(CamelModel):
    """Inbound water-quality sample."""

    village: str = Field(min_length=1, max_length=200)
    ph: float = Field(ge=0, le=14)
    turbidity: float = Field(ge=0, description="Turbidity in NTU")
    timestamp: Optional[datetime] = None

    @field_validator("village")
    @classmethod
    def strip_village(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("village cannot be blank")
        return value

    # Allow integer/float epoch seconds as timestamp input
    @field_validator("timestamp", mode="before")
    @classmethod
    def parse_epoch_timestamp(cls, value: object) -> object:
        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(value, tz=timezone.utc)
        return value


class SensorReadingRead(CamelReadModel):
    id: str
    village: str
    ph: float
    turbidity: float
    created_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value: object) -> object:
        return str(value) if value is not None else value


class SensorListQuery(CamelModel):
    village: Optional[str] = None
    limit: int = Field(default=100, ge=1, le=1000)
