# schemas.py
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def as_utc(value):
    """Normalize a datetime to UTC; naive values (plain dates, SQLite rows) are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UserCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    # ISO date ("1990-05-17") or instant ("2024-03-01T10:20:30.000Z")
    dob: Optional[datetime] = None
    address: Optional[str] = None
    description: Optional[str] = None

    @field_validator("dob")
    @classmethod
    def dob_to_utc(cls, v):
        return as_utc(v)


class UserUpdate(UserCreate):
    # Same fields as create; id and createdAt are not accepted
    pass


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: Optional[str] = None
    dob: Optional[datetime] = None
    address: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, serialization_alias="createdAt")

    @field_validator("dob", "created_at")
    @classmethod
    def timestamps_to_utc(cls, v):
        return as_utc(v)


class Message(BaseModel):
    message: str
