"""
MongoDB integration.

This module owns the driver objects: it builds the ``MongoClient``
from settings, resolves the application database and creates the
indexes the services rely on.  The unique index on ``username`` is
what enforces username uniqueness, including for concurrent signups;
the services do no checking of their own.

Services receive plain ``pymongo.collection.Collection`` objects and
use only ``insert_one``, ``find_one``, ``find_one_and_update``,
``find_one_and_delete`` and ``find().sort()``, so any object with
that surface (for example a ``mongomock`` collection) can stand in for
a live server.
"""

import logging

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

from .config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


def create_client(settings: Settings = default_settings) -> MongoClient:
    """Create a client for ``settings.mongo_uri``.

    The client is timezone aware so that ``dateJoined`` and
    ``msgDateTime`` come back as UTC datetimes.  Connecting is lazy;
    the first query fails after ``mongo_timeout_ms`` if the server is
    unreachable.
    """
    logger.info("Connecting to MongoDB at %s", settings.mongo_uri)
    return MongoClient(
        settings.mongo_uri,
        tz_aware=True,
        serverSelectionTimeoutMS=settings.mongo_timeout_ms,
    )


def get_database(client: MongoClient, settings: Settings = default_settings) -> Database:
    """Return the application database from ``client``."""
    return client[settings.mongo_db_name]


def init_db(database: Database, settings: Settings = default_settings) -> None:
    """Create the indexes used by the services.

    ``create_index`` is idempotent, so this is safe to call on every
    startup.
    """
    users = database[settings.user_collection]
    users.create_index([("username", ASCENDING)], unique=True, name="username_unique")
    messages = database[settings.message_collection]
    messages.create_index([("msgDateTime", ASCENDING)], name="msgDateTime_asc")
    logger.info(
        "Indexes ensured on %s.%s and %s.%s",
        database.name,
        settings.user_collection,
        database.name,
        settings.message_collection,
    )
