"""
Tests for the message service.
"""
from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest
from pymongo.errors import PyMongoError

from chat_accounts_api.app.core.result import Err, Ok
from chat_accounts_api.app.schemas.message import Message
from chat_accounts_api.app.services.message_service import MessageService

from conftest import make_message


class TestSaveMessage:
    """Test saving messages."""

    @pytest.mark.asyncio
    async def test_returns_saved_message(self, message_service):
        message = make_message("Hello", "User1")

        result = await message_service.save_message(message)

        assert isinstance(result, Ok)
        assert result.value.id
        assert result.value.msg == "Hello"
        assert result.value.msgFrom == "User1"

    @pytest.mark.asyncio
    async def test_insert_failure(self):
        collection = MagicMock()
        collection.insert_one.side_effect = PyMongoError("Database save failed")

        result = await MessageService(collection).save_message(make_message())

        assert isinstance(result, Err)
        assert result.error.startswith("Error when saving a message")

    @pytest.mark.asyncio
    async def test_no_insert_result(self):
        collection = MagicMock()
        collection.insert_one.return_value = None

        result = await MessageService(collection).save_message(make_message())

        assert result == Err("Error when saving a message: Database save failed")


class TestGetMessages:
    """Test listing messages."""

    @pytest.mark.asyncio
    async def test_empty_store(self, message_service):
        assert await message_service.get_messages() == []

    @pytest.mark.asyncio
    async def test_sorted_by_date_ascending(self, message_service):
        base = datetime(2024, 6, 4, 12, 0, 0)
        # Saved out of order on purpose.
        for offset, text in [(2, "third"), (0, "first"), (1, "second")]:
            await message_service.save_message(
                Message(msg=text, msgFrom="User1", msgDateTime=base + timedelta(days=offset))
            )

        messages = await message_service.get_messages()

        assert [m.msg for m in messages] == ["first", "second", "third"]
        assert all(m.id for m in messages)

    @pytest.mark.asyncio
    async def test_read_failure_returns_empty_list(self):
        collection = MagicMock()
        collection.find.side_effect = PyMongoError("Error retrieving documents")

        assert await MessageService(collection).get_messages() == []

    @pytest.mark.asyncio
    async def test_skips_documents_that_do_not_fit(self, message_service, mongo_db, test_settings):
        await message_service.save_message(make_message("Hello", "User1"))
        mongo_db[test_settings.message_collection].insert_one({"msg": "legacy", "msgFrom": "u"})

        messages = await message_service.get_messages()

        assert [m.msg for m in messages] == ["Hello"]
