"""Chat accounts API client.

A thin wrapper around the chat accounts REST API for scripts, bots and
integration tests.  The client uses the ``requests`` library and never
raises for HTTP or network failures: every method returns a tuple
``(data, error)`` where exactly one side is meaningful.

* :meth:`signup` – create an account.
* :meth:`login` – check a username/password pair.
* :meth:`get_user` – look up a user by username.
* :meth:`delete_user` – delete a user by username.
* :meth:`reset_password` – set a new password.
* :meth:`add_message` – post a chat message.
* :meth:`get_messages` – download the message history.

``error`` is a dictionary with keys ``status_code`` (``None`` for
network failures) and ``message``.  The server answers some errors in
plain text and others as ``{"error": ...}``; both end up in
``message``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

ApiError = Dict[str, Any]


class ChatAccountsAPI:
    """Client for the chat accounts API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:8000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict):
            return str(body.get("error") or body.get("detail") or body)
        return str(body)

    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[ApiError]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/user/login``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(method=method, url=url, json=json_body, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

        if not response.ok:
            message = self._error_message(response) or response.reason or ""
            logger.error("API request failed (%s): %s", response.status_code, message)
            return None, {"status_code": response.status_code, "message": message}
        if not response.content:
            return None, None
        try:
            return response.json(), None
        except ValueError:
            return None, {"status_code": response.status_code, "message": "Response is not valid JSON"}

    # ------------------------------------------------------------------
    # User operations
    # ------------------------------------------------------------------
    def signup(self, username: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request("POST", "/user/signup", json_body={"username": username, "password": password})

    def login(self, username: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request("POST", "/user/login", json_body={"username": username, "password": password})

    def get_user(self, username: str) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request("GET", f"/user/getUser/{quote(username, safe='')}")

    def delete_user(self, username: str) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request("DELETE", f"/user/deleteUser/{quote(username, safe='')}")

    def reset_password(self, username: str, new_password: str) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Set ``new_password`` for ``username``."""
        return self._request("PUT", "/user/resetPassword", json_body={"username": username, "password": new_password})

    # ------------------------------------------------------------------
    # Message operations
    # ------------------------------------------------------------------
    def add_message(
        self, msg: str, msg_from: str, msg_date_time: Optional[datetime] = None
    ) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Post a message.  The server stamps it with the current time when
        ``msg_date_time`` is omitted."""
        payload: Dict[str, Any] = {"msg": msg, "msgFrom": msg_from}
        if msg_date_time is not None:
            payload["msgDateTime"] = msg_date_time.isoformat()
        return self._request("POST", "/messaging/addMessage", json_body=payload)

    def get_messages(self) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        """Retrieve the message history.

        Returns:
            A tuple ``(messages, error)``. ``messages`` is empty on failure.
        """
        data, error = self._request("GET", "/messaging/getMessages")
        if error:
            return [], error
        return (data if isinstance(data, list) else []), None
