"""
Result envelope returned by the service layer.

Services never raise to their callers.  Each operation returns either
``Ok(value)`` carrying the payload or ``Err(error)`` carrying a
human-readable message, and callers must check which one they got
before using the payload::

    result = await users.get_user_by_username("alice")
    if isinstance(result, Err):
        ...
    user = result.value

``Err.to_dict()`` gives the ``{"error": "..."}`` body that the JSON error
responses send.
``unwrap()`` turns the envelope back into an exception for handlers
that funnel every failure through a single ``except`` block.
"""

from dataclasses import dataclass
from typing import Dict, Generic, TypeVar, Union

T = TypeVar("T")


class ServiceError(Exception):
    """Raised by ``Err.unwrap`` with the envelope's error message."""


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome wrapping ``value``."""

    value: T

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome with a descriptive ``error`` message."""

    error: str

    def unwrap(self):
        raise ServiceError(self.error)

    def to_dict(self) -> Dict[str, str]:
        return {"error": self.error}


Result = Union[Ok[T], Err]
