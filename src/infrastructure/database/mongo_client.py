"""MongoDB client shared by the repositories.

A single ``MongoClient`` (and therefore a single connection pool) is created
lazily per process. When MONGO_URI is unset or MONGO_DISABLED=1 the
repositories fall back to the in-memory store instead.
"""
from __future__ import annotations

import logging
import os
import re

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

logger = logging.getLogger(__name__)

USERS = "users"
PROFILES = "profiles"
POSTS = "posts"


def mongo_enabled() -> bool:
    return os.getenv("MONGO_DISABLED", "0") != "1" and bool(os.getenv("MONGO_URI"))


def ensure_indexes(db: Database) -> None:
    """Create the unique indexes backing email, handle and profile ownership."""
    db[USERS].create_index([("email", ASCENDING)], unique=True)
    db[PROFILES].create_index([("user", ASCENDING)], unique=True)
    db[PROFILES].create_index([("handle", ASCENDING)], unique=True)
    db[POSTS].create_index([("date", DESCENDING)])
    logger.debug("MongoDB indexes ensured")


class MongoDatabase:
    """Owns the MongoClient and the application database handle."""

    def __init__(self, uri: str, db_name: str) -> None:
        try:
            self._client: MongoClient = MongoClient(uri, tz_aware=True)
            self.db: Database = self._client[db_name]
            ensure_indexes(self.db)
        except PyMongoError as exc:
            logger.error("MongoDB connection to database %r failed: %s", db_name, exc)
            raise RuntimeError(f"Failed to connect to MongoDB: {exc}") from exc
        logger.info("Connected to MongoDB database %r", db_name)

    def close(self) -> None:
        self._client.close()


# Singleton instance
_MONGO: MongoDatabase | None = None


def get_mongo_database() -> Database | None:
    """Return the shared database handle, or None when running in-memory."""
    global _MONGO
    if not mongo_enabled():
        return None
    if _MONGO is None:
        _MONGO = MongoDatabase(
            uri=os.environ["MONGO_URI"],
            db_name=os.getenv("MONGO_DB_NAME", "devconnect"),
        )
    return _MONGO.db


def close_mongo() -> None:
    global _MONGO
    if _MONGO is not None:
        _MONGO.close()
    _MONGO = None


class DuplicateKeyViolation(Exception):
    """A unique index (email, handle, profile owner) rejected a write."""

    def __init__(self, field: str) -> None:
        super().__init__(f"duplicate value for {field}")
        self.field = field


def new_id() -> str:
    return str(ObjectId())


def parse_object_id(value: str) -> ObjectId | None:
    """Return the ObjectId for a 24-hex string, or None when malformed."""
    if not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


_INDEX_NAME = re.compile(r"index: (\w+?)_-?1\b")


def duplicate_field(exc: DuplicateKeyError, default: str) -> str:
    """Name the field whose unique index rejected the write.

    Servers report it in ``keyPattern``; older servers only in the message.
    """
    key_pattern = (exc.details or {}).get("keyPattern") or {}
    if key_pattern:
        return next(iter(key_pattern))
    match = _INDEX_NAME.search(str(exc))
    return match.group(1) if match else default
