"""
MongoDB access for accounts and tracked jobs.

One client is shared by every service; documents leave this layer with a
string `id` in place of Mongo's `_id`.
"""

from typing import Any, Dict, Optional

from bson import ObjectId
from pymongo import MongoClient
from pymongo.database import Database

from jobtracker.config import Config
from jobtracker.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_DB_NAME = "jobtracker"

_client: Optional[MongoClient] = None


def get_database(config: Config) -> Database:
    """Return the configured database, connecting on first use."""
    global _client
    if _client is None:
        logger.info("[Mongo] Creating MongoDB client")
        _client = MongoClient(config.mongo.uri, serverSelectionTimeoutMS=5000)
    return _client.get_database(config.mongo.db_name or DEFAULT_DB_NAME)


def doc_with_id(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Swap `_id` for a string `id`; None passes through."""
    if doc is None:
        return None
    out = {k: v for k, v in doc.items() if k != "_id"}
    if "_id" in doc:
        out["id"] = str(doc["_id"])
    return out


def to_object_id(value: Any) -> Any:
    """ObjectId for a valid hex id string, otherwise the value unchanged (it then matches nothing)."""
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return value
