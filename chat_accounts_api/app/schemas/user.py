"""
Pydantic models for user data.

``User`` mirrors the stored document, including the password hash.
``SafeUser`` is the only shape that ever leaves the service layer: it
has no ``password`` field, and because pydantic ignores unknown keys
by default, validating a raw document into it drops the hash.
"""

from datetime import datetime
from typing import Any

from bson import ObjectId
from pydantic import BaseModel, Field, field_validator


class UserCredentials(BaseModel):
    """Username and plain text password as submitted by a client."""

    username: str = Field(..., examples=["user1"])
    password: str = Field(..., examples=["password"])


class SafeUser(BaseModel):
    """User as exposed through the API."""

    id: str = Field(..., alias="_id", description="Hex ObjectId of the user document")
    username: str = Field(..., examples=["user1"])
    dateJoined: datetime

    model_config = {
        "populate_by_name": True,
    }

    @field_validator("id", mode="before")
    @classmethod
    def stringify_object_id(cls, v: Any) -> Any:
        if isinstance(v, ObjectId):
            return str(v)
        return v


class User(SafeUser):
    """Stored user document; ``password`` holds the ``salt$hash`` string."""

    password: str

    def to_safe_user(self) -> SafeUser:
        return SafeUser.model_validate(self.model_dump(exclude={"password"}))
