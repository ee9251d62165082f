"""Error types raised by the credential service and persistence gateway."""
from __future__ import annotations

from fastapi import status


class CredentialError(Exception):
    """Base error rendered to clients as ``{"message": ...}``."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CredentialError):
    """Missing or mismatched input."""


class ConflictError(CredentialError):
    """A unique field is already taken."""


class AuthenticationError(CredentialError):
    """Unknown email or wrong password."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class PersistenceError(CredentialError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
