"""
Service layer for chat messages.

Messages are immutable once saved: this service only inserts and
lists them.  ``save_message`` reports failures through the ``Result``
envelope like the user service does, but ``get_messages`` returns an
empty list on any failure.  Existing clients treat the list endpoint
as "always an array", so a read failure is logged and otherwise
indistinguishable from an empty history.
"""

import logging
from typing import List

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError
from pymongo import ASCENDING
from pymongo.collection import Collection

from ..core.result import Err, Ok, Result
from ..schemas.message import Message

logger = logging.getLogger(__name__)


class MessageService:
    """Service for chat messages stored in a MongoDB collection."""

    def __init__(self, collection: Collection) -> None:
        self._messages = collection

    async def save_message(self, message: Message) -> Result[Message]:
        """Insert ``message`` and return it with its new ``_id``."""
        try:
            document = message.to_document()
            inserted = await run_in_threadpool(self._messages.insert_one, document)
            if inserted is None or not inserted.inserted_id:
                raise RuntimeError("Database save failed")
            document["_id"] = inserted.inserted_id
            return Ok(Message.model_validate(document))
        except Exception as exc:
            logger.warning("Could not save message from %s: %s", message.msgFrom, exc)
            return Err(f"Error when saving a message: {exc}")

    def _find_sorted(self) -> list:
        return list(self._messages.find().sort("msgDateTime", ASCENDING))

    async def get_messages(self) -> List[Message]:
        """Return every message, oldest ``msgDateTime`` first.

        Stored documents that do not fit ``Message`` (older records
        written without a field, for instance) are logged and left out.
        """
        try:
            documents = await run_in_threadpool(self._find_sorted)
        except Exception as exc:
            logger.error("Could not read messages: %s", exc)
            return []

        history = []
        for document in documents:
            try:
                history.append(Message.model_validate(document))
            except ValidationError as exc:
                logger.warning("Skipping message %s: %s", document.get("_id"), exc)
        return history
