"""Route modules for the Signup Portal API."""
from . import users

__all__ = ["users"]
