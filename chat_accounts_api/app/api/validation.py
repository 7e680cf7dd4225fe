"""
Request body validation shared by the handlers.

Handlers read the raw JSON body rather than declaring pydantic body
models, because a missing or empty field must produce the route's own
400 response, not FastAPI's generic 422.

A field is valid iff it is present and not the empty string.  JSON
``null`` counts as absent.  Any other value is accepted and handlers
store it as text, so ``{"username": 123}`` signs up ``"123"``.  Values
are not trimmed and have no length or character limits.
"""

import json
from typing import Any, Dict, Iterable, List

from fastapi import Request

USER_FIELDS = ("username", "password")


async def read_json_body(request: Request) -> Dict[str, Any]:
    """Return the parsed JSON object from ``request``.

    An empty body, invalid JSON or a JSON value that is not an object
    all yield ``{}`` so that validation reports every field missing.
    """
    raw = await request.body()
    if not raw:
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def is_field_valid(body: Dict[str, Any], field: str) -> bool:
    value = body.get(field)
    return value is not None and value != ""


def missing_fields(body: Dict[str, Any], fields: Iterable[str]) -> List[str]:
    return [field for field in fields if not is_field_valid(body, field)]


def is_user_body_valid(body: Dict[str, Any]) -> bool:
    """True when both ``username`` and ``password`` are valid."""
    return not missing_fields(body, USER_FIELDS)
