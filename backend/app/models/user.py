"""Document model for registered users."""
from datetime import datetime, timezone

from beanie import Document, Indexed
from pydantic import Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Document):
    """Registered user with hashed password and profile fields."""

    username: Indexed(str, unique=True)
    name: str
    email: Indexed(str, unique=True)
    phone: str
    # BSON has no date type; stored as midnight of the birth date.
    dob: datetime
    bio: str | None = None
    password_hash: str = Field(repr=False)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    class Settings:
        name = "users"
