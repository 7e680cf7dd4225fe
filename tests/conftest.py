"""
Shared fixtures for the chat accounts API tests.

This module provides:
- An in-memory MongoDB (mongomock) with the production indexes
- Real services bound to that database
- A TestClient over an app wired to the in-memory database
- A TestClient whose services are replaced with mocks
"""

import os

# Keep PBKDF2 cheap in tests; must be set before settings are imported.
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")

from datetime import datetime, timezone
from typing import Optional
from unittest.mock import MagicMock

import mongomock
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from chat_accounts_api.app.api.deps import get_message_service, get_user_service
from chat_accounts_api.app.core.config import Settings
from chat_accounts_api.app.core.db import init_db
from chat_accounts_api.app.main import create_app
from chat_accounts_api.app.schemas.message import Message
from chat_accounts_api.app.schemas.user import SafeUser
from chat_accounts_api.app.services.message_service import MessageService
from chat_accounts_api.app.services.user_service import UserService

FIXED_DATE = datetime(2024, 12, 3, tzinfo=timezone.utc)


def make_safe_user(username: str = "user1", user_id: Optional[ObjectId] = None) -> SafeUser:
    """Create a SafeUser as a service would return it."""
    return SafeUser(id=str(user_id or ObjectId()), username=username, dateJoined=FIXED_DATE)


def make_message(msg: str = "Hello", msg_from: str = "user1", when: datetime = FIXED_DATE) -> Message:
    return Message(msg=msg, msgFrom=msg_from, msgDateTime=when)


def parse_iso(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


# =============================================================================
# Database and services
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    return Settings(mongo_db_name="chat_accounts_test", log_level="WARNING")


@pytest.fixture
def mongo_db(test_settings):
    database = mongomock.MongoClient()[test_settings.mongo_db_name]
    init_db(database, test_settings)
    return database


@pytest.fixture
def user_service(mongo_db, test_settings) -> UserService:
    return UserService(mongo_db[test_settings.user_collection])


@pytest.fixture
def message_service(mongo_db, test_settings) -> MessageService:
    return MessageService(mongo_db[test_settings.message_collection])


# =============================================================================
# HTTP clients
# =============================================================================


@pytest.fixture
def client(mongo_db, test_settings):
    """TestClient backed by the in-memory database."""
    app = create_app(database=mongo_db, app_settings=test_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user_service_mock():
    return MagicMock(spec=UserService)


@pytest.fixture
def message_service_mock():
    return MagicMock(spec=MessageService)


@pytest.fixture
def mocked_client(mongo_db, test_settings, user_service_mock, message_service_mock):
    """TestClient whose handlers talk to mocked services."""
    app = create_app(database=mongo_db, app_settings=test_settings)
    app.dependency_overrides[get_user_service] = lambda: user_service_mock
    app.dependency_overrides[get_message_service] = lambda: message_service_mock
    with TestClient(app) as test_client:
        yield test_client
