# Single Motor client per process, shared through the get_db dependency

import logging

from bson import ObjectId
from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING

from .config import Settings
from .errors import InvalidIdentifier

logger = logging.getLogger(__name__)


def connect(settings: Settings) -> AsyncIOMotorClient:
    client = AsyncIOMotorClient(
        settings.mongodb_url,
        serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
        timeoutMS=settings.mongodb_timeout_ms,
    )
    logger.info("MongoDB client created for database %r", settings.mongodb_db)
    return client


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    # The unique index closes the race between the duplicate-email
    # lookup and the insert during concurrent registrations.
    await db.users.create_index([("email", ASCENDING)], unique=True)
    await db.tasks.create_index([("userId", ASCENDING)])


async def ping(db: AsyncIOMotorDatabase) -> bool:
    try:
        await db.command("ping")
    except Exception:
        logger.exception("MongoDB ping failed")
        return False
    return True


def get_db(request: Request) -> AsyncIOMotorDatabase:
    return request.app.state.db


def to_object_id(value: str, kind: str = "record") -> ObjectId:
    if not ObjectId.is_valid(value):
        raise InvalidIdentifier(f"Invalid {kind} id: {value}")
    return ObjectId(value)
