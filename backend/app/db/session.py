"""Database client lifecycle and mapper initialisation."""
from __future__ import annotations

import logging

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from app.core.config import Settings
from app.core.exceptions import PersistenceError
from app.models import DOCUMENT_MODELS

logger = logging.getLogger(__name__)


async def connect(settings: Settings) -> AsyncIOMotorClient:
    """Open a client for the configured server and make sure it answers."""

    client = AsyncIOMotorClient(settings.mongodb_url, serverSelectionTimeoutMS=5000)
    try:
        await client.admin.command("ping")
    except PyMongoError as exc:
        client.close()
        raise PersistenceError(f"Could not connect to MongoDB: {exc}") from exc
    return client


async def init_database(client: AsyncIOMotorClient, database_name: str) -> AsyncIOMotorDatabase:
    """Bind the document models to ``database_name`` and build their indexes."""

    database = client[database_name]
    await init_beanie(database=database, document_models=DOCUMENT_MODELS)
    logger.info("Document models bound to database %s", database_name)
    return database
