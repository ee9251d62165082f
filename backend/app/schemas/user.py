"""Pydantic schemas for registration."""
from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserRegister(BaseModel):
    """Registration form. Presence is checked by the service, not here."""

    model_config = ConfigDict(populate_by_name=True)

    username: str | None = Field(default=None, max_length=64)
    name: str | None = Field(default=None, max_length=128)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=32)
    dob: date | None = None
    bio: str | None = Field(default=None, max_length=1000)
    password: str | None = Field(default=None, max_length=128)
    confirm_password: str | None = Field(default=None, alias="confirmPassword", max_length=128)


class MessageResponse(BaseModel):
    message: str
