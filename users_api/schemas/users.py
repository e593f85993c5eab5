"""Pydantic models describing the /api/users wire format."""
from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from users_api.domain.users import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH


class UserBase(BaseModel):
    email: EmailStr
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)

    @field_validator("email")
    @classmethod
    def _email_fits_column(cls, value: str) -> str:
        if len(value) > EMAIL_MAX_LENGTH:
            raise ValueError(f"email must be at most {EMAIL_MAX_LENGTH} characters")
        return value.strip().lower()

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class UserCreate(UserBase):
    """Body of POST /api/users."""


class UserUpdate(UserBase):
    """Body of PUT /api/users/{id}; any ``id`` in the body is ignored."""


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        # SQLite drops the offset; every timestamp is written in UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class UserPage(BaseModel):
    items: list[UserRead]
    page: int
    size: int
    total: int
    total_pages: int


class MessageResponse(BaseModel):
    message: str
