"""
Tests for the requests-based API client.
"""
import json
from datetime import datetime
from unittest.mock import MagicMock

import pytest
import requests

from chat_accounts_client import ChatAccountsAPI


def make_response(status_code: int, body=None, text: str = "") -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.reason = "OK" if status_code < 400 else "Error"
    if body is not None:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = text.encode("utf-8")
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api(session):
    return ChatAccountsAPI(base_url="http://localhost:8000/", session=session)


class TestChatAccountsAPI:
    """Test request building and error mapping."""

    def test_signup_success(self, api, session):
        session.request.return_value = make_response(200, {"_id": "1", "username": "user1"})

        data, error = api.signup("user1", "password")

        assert error is None
        assert data["username"] == "user1"
        session.request.assert_called_once_with(
            method="POST",
            url="http://localhost:8000/user/signup",
            json={"username": "user1", "password": "password"},
            timeout=15,
        )

    def test_plain_text_error(self, api, session):
        session.request.return_value = make_response(400, text="Invalid user body")

        data, error = api.login("", "")

        assert data is None
        assert error == {"status_code": 400, "message": "Invalid user body"}

    def test_json_error(self, api, session):
        session.request.return_value = make_response(400, {"error": "Invalid user body"})

        _, error = api.reset_password("user1", "")

        assert error == {"status_code": 400, "message": "Invalid user body"}

    def test_network_error(self, api, session):
        session.request.side_effect = requests.ConnectionError("refused")

        data, error = api.get_user("user1")

        assert data is None
        assert error["status_code"] is None
        assert "refused" in error["message"]

    def test_username_is_quoted(self, api, session):
        session.request.return_value = make_response(200, {"username": "a b/c"})

        api.delete_user("a b/c")

        assert session.request.call_args.kwargs["url"] == "http://localhost:8000/user/deleteUser/a%20b%2Fc"

    def test_add_message_with_date(self, api, session):
        session.request.return_value = make_response(200, {"msg": "Hello"})

        api.add_message("Hello", "user1", datetime(2024, 6, 4))

        assert session.request.call_args.kwargs["json"] == {
            "msg": "Hello",
            "msgFrom": "user1",
            "msgDateTime": "2024-06-04T00:00:00",
        }

    def test_get_messages_failure_is_empty(self, api, session):
        session.request.return_value = make_response(500, text="boom")

        messages, error = api.get_messages()

        assert messages == []
        assert error["status_code"] == 500
