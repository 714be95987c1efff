import logging
import os
from typing import Any

from pymongo import MongoClient
from pymongo.database import Database

logger = logging.getLogger(__name__)

_client: MongoClient[Any] | None = None


def get_client() -> MongoClient[Any]:
    """Lazily creates the process-wide client; datetimes come back timezone-aware."""
    global _client
    if _client is None:
        mongo_uri = os.getenv("MONGO_URI", "mongodb://localhost:27017")
        _client = MongoClient(mongo_uri, tz_aware=True)
    return _client


def get_db() -> Database[Any]:
    db_name = os.getenv("MONGO_DB_NAME", "todo_app")
    if _client is None:
        logger.info(f"Using MongoDB database {db_name!r}")
    return get_client()[db_name]
