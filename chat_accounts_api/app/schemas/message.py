"""
Pydantic model for chat messages.

``msgFrom`` holds the sender's username by value; nothing links it to
a user document, so deleting a user leaves their messages in place.
"""

from datetime import datetime
from typing import Any, Optional

from bson import ObjectId
from pydantic import BaseModel, Field, field_validator


class Message(BaseModel):
    """A single chat message."""

    id: Optional[str] = Field(None, alias="_id")
    msg: str = Field(..., examples=["Hello"])
    msgFrom: str = Field(..., examples=["user1"])
    msgDateTime: datetime

    model_config = {
        "populate_by_name": True,
    }

    @field_validator("id", mode="before")
    @classmethod
    def stringify_object_id(cls, v: Any) -> Any:
        if isinstance(v, ObjectId):
            return str(v)
        return v

    def to_document(self) -> dict:
        """Return the fields to insert, without ``_id``."""
        return self.model_dump(exclude={"id"})
