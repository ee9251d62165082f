"""Persistence gateway for user documents."""
from __future__ import annotations

import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.core.exceptions import ConflictError, PersistenceError
from app.models.user import User

logger = logging.getLogger(__name__)


class UserStore:
    """Find and insert ``User`` documents in the database handle it is given.

    Queries go through the handle's collection rather than the mapper's
    class-level binding, so two stores on two databases never share data.
    """

    def __init__(self, database: AsyncIOMotorDatabase) -> None:
        self.database = database
        self.collection = database[User.Settings.name]

    async def find_one_by_field(self, field: str, value: Any) -> User | None:
        try:
            document = await self.collection.find_one({field: value})
        except PyMongoError as exc:
            logger.error("Lookup of user by %s failed: %s", field, exc)
            raise PersistenceError("Failed to query users") from exc
        if document is None:
            return None
        return User.model_validate(document)

    async def insert(self, user: User) -> User:
        document = user.model_dump(by_alias=True, exclude={"id", "revision_id"})
        try:
            result = await self.collection.insert_one(document)
        except DuplicateKeyError as exc:
            raise ConflictError("Username or email already registered") from exc
        except PyMongoError as exc:
            logger.error("Insert of user %s failed: %s", user.username, exc)
            raise PersistenceError("Failed to save user") from exc
        user.id = result.inserted_id
        return user
