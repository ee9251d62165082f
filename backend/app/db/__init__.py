"""MongoDB access through Motor and Beanie."""
from .session import connect, init_database
from .users import UserStore

__all__ = ["connect", "init_database", "UserStore"]
