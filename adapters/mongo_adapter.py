"""MongoDB adapter holding the process-wide client for product storage.
"""

from datetime import timezone
from typing import Optional
import logging
from bson.codec_options import CodecOptions
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.write_concern import WriteConcern

logger = logging.getLogger("shoppinglist.mongo")

_client: Optional[MongoClient] = None
_db: Optional[Database] = None
_collection_name = "products"

# Datetimes come back as aware UTC values, matching what the API writes.
CODEC_OPTIONS = CodecOptions(tz_aware=True, tzinfo=timezone.utc)


# ------------------ Connection ------------------
def connect(
    uri: Optional[str],
    db_name: str = "shoppinglist",
    collection: str = "products",
    timeout_ms: int = 5000,
):
    """Open the shared client and verify the server answers.

    Raises:
        RuntimeError: if no connection string was configured
        pymongo.errors.PyMongoError: if the server cannot be reached
    """
    global _client, _db, _collection_name
    if not uri:
        raise RuntimeError("MONGO_URI is not configured; refusing to start")

    client = MongoClient(
        uri,
        serverSelectionTimeoutMS=timeout_ms,
        tz_aware=CODEC_OPTIONS.tz_aware,
        tzinfo=CODEC_OPTIONS.tzinfo,
    )
    try:
        client.admin.command("ping")
    except Exception:
        client.close()
        raise

    _client = client
    _db = client[db_name]
    _collection_name = collection
    logger.info("Connected to MongoDB (database: %s, collection: %s)", db_name, collection)


def close():
    """Close MongoDB connection."""
    global _client, _db
    try:
        if _client is not None:
            _client.close()
            logger.info("MongoDB client closed")
    except Exception:
        logger.exception("Error closing MongoDB client")
    finally:
        _client = None
        _db = None


def is_connected() -> bool:
    return _db is not None


def get_collection() -> Collection:
    """Return the products collection with journaled writes.

    An acknowledged write is on disk before pymongo returns, so callers never
    observe a write that could still be lost.
    """
    if _db is None:
        raise RuntimeError("MongoDB adapter is not connected")
    return _db.get_collection(
        _collection_name, write_concern=WriteConcern(w=1, j=True)
    )


def ping() -> bool:
    """Round trip to the server; False when disconnected or unreachable."""
    if _client is None:
        return False
    try:
        _client.admin.command("ping")
        return True
    except Exception:
        logger.warning("MongoDB ping failed", exc_info=True)
        return False
