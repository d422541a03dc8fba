"""MongoDB client management.

The process shares one MongoClient. It is created on first use, pinged on
every later call and rebuilt when the ping fails. A first connection that
fails (usually a missing or wrong MONGO_URL) is not retried until
reset_client() is called.
"""

import os
import logging
import threading
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

# Driver-level logs are too chatty at INFO
logging.getLogger('pymongo').setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'agora')
USERS_COLLECTION_NAME = 'users'
# Users of the shared identity store; the forum only reads and deletes them.
COMMON_USERS_COLLECTION_NAME = 'common_users'

CLIENT_OPTIONS = {
    'serverSelectionTimeoutMS': 5000,
    'connectTimeoutMS': 5000,
    'socketTimeoutMS': 30000,
    'maxPoolSize': 20,
    'retryWrites': True,
    'retryReads': True,
}

_lock = threading.Lock()
_client: MongoClient | None = None
_connected_once = False
_gave_up = False


def reset_client():
    """Forget the cached client and any earlier connection failure."""
    global _client, _connected_once, _gave_up
    with _lock:
        _client = None
        _connected_once = False
        _gave_up = False


def _is_alive(client: MongoClient) -> bool:
    try:
        client.admin.command('ping')
        return True
    except PyMongoError:
        return False


def get_mongodb_client() -> MongoClient | None:
    """Return the shared client, or None when MongoDB cannot be reached."""
    global _client, _connected_once, _gave_up

    with _lock:
        if _client is not None:
            if _is_alive(_client):
                return _client
            logger.debug("[MONGODB] Cached client failed ping, reconnecting")
            _client = None

        if _gave_up:
            return None

        if not MONGO_URL:
            logger.error("[MONGODB] MONGO_URL not configured.")
            _gave_up = True
            return None

        try:
            client = MongoClient(MONGO_URL, **CLIENT_OPTIONS)
            client.admin.command('ping')
        except PyMongoError as e:
            if not _connected_once:
                logger.error(f"[MONGODB] Initial connection failed: {str(e)[:200]}")
                _gave_up = True
            return None

        if not _connected_once:
            logger.info(f"[MONGODB] Connected successfully to {DATABASE_NAME}")
        _connected_once = True
        _client = client
        return client


def get_database() -> Database | None:
    """Return the forum database, or None when MongoDB cannot be reached."""
    client = get_mongodb_client()
    if client is None:
        return None
    return client[DATABASE_NAME]
