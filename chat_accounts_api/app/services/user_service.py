"""
Business logic for user accounts.

``UserService`` wraps the user collection.  Every operation returns a
``Result`` envelope instead of raising: driver failures, duplicate
usernames, unknown users and bad credentials all come back as
``Err("<context>: <message>")`` so that request handlers only need to
check which variant they received.

Passwords are stored as PBKDF2 hashes (see ``core.security``) and are
stripped from every value returned to callers.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from fastapi.concurrency import run_in_threadpool
from pymongo import ReturnDocument
from pymongo.collection import Collection

from ..core.result import Err, Ok, Result
from ..core.security import hash_password, verify_password
from ..schemas.user import SafeUser, User, UserCredentials

logger = logging.getLogger(__name__)


def to_safe_user(document: Mapping[str, Any]) -> SafeUser:
    """Validate a stored user document and drop its password."""
    return User.model_validate(dict(document)).to_safe_user()


class UserService:
    """Service for user accounts stored in a MongoDB collection.

    Uniqueness of ``username`` is enforced by the collection's unique
    index (created by ``core.db.init_db``), not by this class.
    """

    def __init__(self, collection: Collection) -> None:
        self._users = collection

    async def save_user(
        self, username: str, password: str, date_joined: Optional[datetime] = None
    ) -> Result[SafeUser]:
        """Create a user and return it without the password.

        ``dateJoined`` defaults to the current UTC time.  A duplicate
        username surfaces as the driver's ``DuplicateKeyError`` message
        inside the error envelope.
        """
        logger.info("Registering user %s", username)
        try:
            document: Dict[str, Any] = {
                "username": username,
                "password": await run_in_threadpool(hash_password, password),
                "dateJoined": date_joined or datetime.now(timezone.utc),
            }
            inserted = await run_in_threadpool(self._users.insert_one, document)
            if inserted is None or inserted.inserted_id is None:
                raise RuntimeError("Failed to create user")
            document["_id"] = inserted.inserted_id
            return Ok(to_safe_user(document))
        except Exception as exc:
            logger.warning("Could not save user %s: %s", username, exc)
            return Err(f"Error occurred when saving user: {exc}")

    async def get_user_by_username(self, username: str) -> Result[SafeUser]:
        try:
            document = await run_in_threadpool(self._users.find_one, {"username": username})
            if document is None:
                return Err("User not found")
            return Ok(to_safe_user(document))
        except Exception as exc:
            logger.error("Lookup of user %s failed: %s", username, exc)
            return Err(f"Error occurred when finding user: {exc}")

    async def login_user(self, credentials: UserCredentials) -> Result[SafeUser]:
        """Check a username/password pair.

        An unknown username and a wrong password both yield
        ``Err("Authentication failed")`` so the response does not reveal
        which accounts exist.
        """
        try:
            document = await run_in_threadpool(self._users.find_one, {"username": credentials.username})
            if document is None:
                return Err("Authentication failed")
            matches = await run_in_threadpool(verify_password, credentials.password, document.get("password"))
            if not matches:
                return Err("Authentication failed")
            return Ok(to_safe_user(document))
        except Exception as exc:
            logger.error("Authentication of %s failed: %s", credentials.username, exc)
            return Err(f"Error occurred when authenticating user: {exc}")

    async def delete_user_by_username(self, username: str) -> Result[SafeUser]:
        """Delete a user and return the removed record."""
        try:
            deleted = await run_in_threadpool(self._users.find_one_and_delete, {"username": username})
            if deleted is None:
                return Err("Error occurred when deleting user: User not found")
            logger.info("Deleted user %s", username)
            return Ok(to_safe_user(deleted))
        except Exception as exc:
            logger.error("Deletion of user %s failed: %s", username, exc)
            return Err(f"Error occurred when deleting user: {exc}")

    async def update_user(self, username: str, updates: Mapping[str, Any]) -> Result[SafeUser]:
        """Apply a partial update and return the user as stored afterwards.

        A ``password`` entry is hashed before it is written.  ``_id``
        cannot be changed.  The stored record merged with ``updates`` is
        validated against ``User`` first; a rejected update returns
        ``Err`` and leaves the stored record untouched.
        """
        try:
            fields = {key: value for key, value in updates.items() if key != "_id"}
            if not fields:
                return Err("Error occurred when updating user: No fields to update")
            current = await run_in_threadpool(self._users.find_one, {"username": username})
            if current is None:
                return Err("Error occurred when updating user: User not found")
            if "password" in fields:
                fields["password"] = await run_in_threadpool(hash_password, fields["password"])
            User.model_validate({**current, **fields})
            updated = await run_in_threadpool(
                self._users.find_one_and_update,
                {"_id": current["_id"]},
                {"$set": fields},
                return_document=ReturnDocument.AFTER,
            )
            if updated is None:
                return Err("Error occurred when updating user: User not found")
            logger.info("Updated user %s (%s)", username, ", ".join(sorted(fields)))
            return Ok(to_safe_user(updated))
        except Exception as exc:
            logger.error("Update of user %s failed: %s", username, exc)
            return Err(f"Error occurred when updating user: {exc}")
