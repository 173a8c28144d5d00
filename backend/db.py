"""MongoDB connection bootstrapping."""

import logging
from typing import Optional

import pymongo
from pymongo.errors import PyMongoError

from .config import MONGO_DB, MONGO_URL, PROPERTY_COLLECTION, USER_COLLECTION

logger = logging.getLogger(__name__)

_client: Optional[pymongo.MongoClient] = None


def connect_db(url: str = MONGO_URL, db_name: str = MONGO_DB):
    """Connect (once) and return the database handle."""
    global _client
    if _client is None:
        client = pymongo.MongoClient(url, serverSelectionTimeoutMS=5000)
        try:
            client.admin.command("ping")
        except PyMongoError:
            logger.exception("error while connecting to DB")
            client.close()
            raise
        logger.info("connected to mongoDB")
        _client = client
    return _client[db_name]


def close_db() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None


def get_property_collection(db):
    return db[PROPERTY_COLLECTION]


def get_user_collection(db):
    return db[USER_COLLECTION]
