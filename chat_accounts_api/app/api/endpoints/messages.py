"""
Message endpoints, mounted under ``/messaging``.

``POST /addMessage`` stores one message and ``GET /getMessages``
returns the whole history in chronological order.  The list endpoint
always answers 200 with an array; the service turns read failures into
an empty list.
"""

import logging
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import ValidationError

from ...schemas.message import Message
from ...services.message_service import MessageService
from ..deps import get_message_service
from ..validation import missing_fields, read_json_body

logger = logging.getLogger(__name__)

router = APIRouter()

MESSAGE_FIELDS = ("msg", "msgFrom")
INVALID_MESSAGE_BODY = "Invalid message body"


@router.post("/addMessage")
async def add_message(request: Request, messages: MessageService = Depends(get_message_service)) -> Response:
    """Save a message from ``{msg, msgFrom, msgDateTime?}``.

    ``msgDateTime`` defaults to the time the request is handled; when
    given it must be an ISO 8601 timestamp.
    """
    body = await read_json_body(request)
    if missing_fields(body, MESSAGE_FIELDS):
        return PlainTextResponse(INVALID_MESSAGE_BODY, status_code=status.HTTP_400_BAD_REQUEST)
    try:
        message = Message(
            msg=str(body["msg"]),
            msgFrom=str(body["msgFrom"]),
            msgDateTime=body.get("msgDateTime") or datetime.now(timezone.utc),
        )
    except ValidationError:
        return PlainTextResponse(INVALID_MESSAGE_BODY, status_code=status.HTTP_400_BAD_REQUEST)

    try:
        result = await messages.save_message(message)
        return JSONResponse(status_code=status.HTTP_200_OK, content=jsonable_encoder(result.unwrap(), by_alias=True))
    except Exception as exc:
        logger.error("Saving message failed: %s", exc)
        return PlainTextResponse(
            f"Error when adding a message: {exc}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


@router.get("/getMessages")
async def get_messages(messages: MessageService = Depends(get_message_service)) -> Response:
    """Return all messages sorted by ``msgDateTime`` ascending."""
    try:
        history: List[Message] = await messages.get_messages()
    except Exception as exc:
        logger.error("Listing messages failed: %s", exc)
        history = []
    return JSONResponse(status_code=status.HTTP_200_OK, content=jsonable_encoder(history, by_alias=True))
