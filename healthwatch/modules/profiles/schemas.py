from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from healthwatch.shared.constants import Role
from healthwatch.shared.schemas import CamelModel, CamelReadModel


class ProfileCreate(CamelModel):
    user_id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    role: Role
    village: str = Field(min_length=1, max_length=200)


class ProfileRead(CamelReadModel):
    id: str
    user_id: str
    name: str
    email: str
    role: Role
    village: str
    created_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value: object) -> object:
        return str(value) if value is not None else value


class ProfileListQuery(CamelModel):
    role: Optional[Role] = None
    village: Optional[str] = None
