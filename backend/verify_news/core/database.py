import logging
from functools import lru_cache

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from verify_news.core.config import (
    MONGO_URI,
    MONGO_DB_NAME,
    VERIFICATIONS_COLLECTION,
    MONGO_TIMEOUT_MS,
)

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_client() -> MongoClient:
    # MongoClient connects lazily, so building it never blocks on the server.
    # tz_aware keeps created_at in UTC when records are read back
    return MongoClient(MONGO_URI, serverSelectionTimeoutMS=MONGO_TIMEOUT_MS, tz_aware=True)


def get_database() -> Database:
    return get_client()[MONGO_DB_NAME]


def get_verifications_collection() -> Collection:
    return get_database()[VERIFICATIONS_COLLECTION]


def ping() -> bool:
    """Check the MongoDB connection. Returns False instead of raising."""
    try:
        get_client().admin.command("ping")
        logger.info("MongoDB connection is successful!")
        return True
    except PyMongoError as e:
        logger.error("MongoDB connection failed: %s", e)
        return False
