from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from healthwatch.shared.constants import AlertType, Role
from healthwatch.shared.schemas import CamelModel, CamelReadModel


def _unique_roles(value: list[Role]) -> list[Role]:
    roles = list(dict.fromkeys(value))
    if not roles:
        raise ValueError("targetRoles cannot be empty")
    return roles


class AlertInsert(CamelModel):
    """Row written to the alerts collection, by either the manual or the automatic path."""

    message: str
    target_roles: list[Role]
    created_by: str
    village: Optional[str] = None
    type: Optional[AlertType] = None
    disease_or_parameter: Optional[str] = None
    value: Optional[float] = None
    auto: bool = False

    @field_validator("target_roles")
    @classmethod
    def ensure_roles(cls, value: list[Role]) -> list[Role]:
        return _unique_roles(value)

    @model_validator(mode="after")
    def validate_auto_fields(self) -> "AlertInsert":
        if self.auto and not (self.type and self.village and self.disease_or_parameter):
            raise ValueError("automatic alerts require type, village and diseaseOrParameter")
        return self


class AlertCreate(CamelModel):
    """Inbound payload for an alert written by an official."""

    message: str = Field(min_length=1, max_length=1000)
    target_roles: list[Role]
    created_by: str
    village: Optional[str] = None

    @field_validator("target_roles")
    @classmethod
    def ensure_roles(cls, value: list[Role]) -> list[Role]:
        return _unique_roles(value)


class AlertRead(CamelReadModel):
    id: str
    message: str
    target_roles: list[Role]
    created_by: str
    village: Optional[str] = None
    type: Optional[AlertType] = None
    disease_or_parameter: Optional[str] = None
    value: Optional[float] = None
    auto: bool = False
    created_at: datetime
    updated_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value: object) -> object:
        return str(value) if value is not None else value


class AlertListQuery(CamelModel):
    role: Optional[Role] = Field(default=None, description="Only alerts targeting this role")
    village: Optional[str] = None
    auto: Optional[bool] = None
    limit: int = Field(default=50, ge=1, le=500)
