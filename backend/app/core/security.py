"""Security helpers for password hashing and session token signing."""
from __future__ import annotations

import time
from typing import Any

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from passlib.context import CryptContext

from .config import Settings, get_settings


_password_context = CryptContext(schemes=["argon2"], deprecated="auto")


class PasswordHasher:
    """Hash and verify user passwords using Argon2id."""

    @staticmethod
    def hash(password: str) -> str:
        return _password_context.hash(password)

    @staticmethod
    def verify(password: str, hashed: str) -> bool:
        return _password_context.verify(password, hashed)


class SessionSigner:
    """Issue and verify stateless session tokens bound to a user id.

    The payload carries ``sub`` (the user id), ``iat`` and ``exp`` as POSIX
    seconds. Nothing is stored server side: a token is valid while its
    signature checks out and ``exp`` lies in the future.
    """

    def __init__(self, settings: Settings | None = None, salt: str = "signup-session") -> None:
        settings = settings or get_settings()
        self._max_age = settings.access_token_expire_seconds
        self._serializer = URLSafeTimedSerializer(settings.secret_key, salt=salt)

    def issue(self, user_id: str, now: float | None = None) -> str:
        issued_at = int(now if now is not None else time.time())
        return self.dumps({"sub": user_id, "iat": issued_at, "exp": issued_at + self._max_age})

    def dumps(self, data: dict[str, Any]) -> str:
        return self._serializer.dumps(data)

    def loads(self, token: str, max_age: int | None = None) -> dict[str, Any]:
        try:
            payload = self._serializer.loads(token, max_age=self._max_age if max_age is None else max_age)
        except (BadSignature, SignatureExpired) as exc:
            raise ValueError("Invalid or expired session token") from exc
        if payload.get("exp", 0) < time.time():
            raise ValueError("Invalid or expired session token")
        return payload
