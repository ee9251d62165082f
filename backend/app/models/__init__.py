"""Beanie document models registered with the mapper at startup."""
from .user import User

DOCUMENT_MODELS = [User]

__all__ = ["User", "DOCUMENT_MODELS"]
