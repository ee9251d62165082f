"""Credential service: registration and login."""
from __future__ import annotations

import logging
from datetime import datetime, time
from functools import lru_cache

from app.core.exceptions import AuthenticationError, ConflictError, ValidationError
from app.core.security import PasswordHasher, SessionSigner
from app.db.users import UserStore
from app.models.user import User
from app.schemas.auth import LoginRequest
from app.schemas.user import UserRegister

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("username", "name", "email", "phone", "dob", "password", "confirm_password")


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _normalize(value: str) -> str:
    return value.strip().lower()


@lru_cache
def _dummy_hash() -> str:
    return PasswordHasher.hash("not-a-real-password")


async def register_user(store: UserStore, data: UserRegister) -> User:
    if any(_is_blank(getattr(data, field)) for field in REQUIRED_FIELDS):
        raise ValidationError("All fields are required")
    if data.password != data.confirm_password:
        raise ValidationError("Passwords do not match")

    email = _normalize(data.email)
    username = _normalize(data.username)
    if await store.find_one_by_field("email", email):
        raise ConflictError("Email already registered")
    if await store.find_one_by_field("username", username):
        raise ConflictError("Username already taken")

    user = User(
        username=username,
        name=data.name.strip(),
        email=email,
        phone=data.phone.strip(),
        dob=datetime.combine(data.dob, time.min),
        bio=data.bio or None,
        password_hash=PasswordHasher.hash(data.password),
    )
    user = await store.insert(user)
    logger.info("Registered user %s", user.username)
    return user


async def authenticate_user(store: UserStore, email: str, password: str) -> User | None:
    user = await store.find_one_by_field("email", _normalize(email))
    if not user:
        # Unknown emails cost one verify, same as a wrong password
        PasswordHasher.verify(password, _dummy_hash())
        return None
    if not PasswordHasher.verify(password, user.password_hash):
        return None
    return user


async def login_user(store: UserStore, data: LoginRequest, signer: SessionSigner) -> str:
    """Check the credentials and return a signed session token."""

    if _is_blank(data.email) or _is_blank(data.password):
        raise ValidationError("Email and password are required")

    user = await authenticate_user(store, data.email, data.password)
    if not user:
        logger.warning("Failed login attempt for %s", data.email)
        raise AuthenticationError()

    logger.info("User %s logged in", user.username)
    return signer.issue(str(user.id))
