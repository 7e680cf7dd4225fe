"""
Top-level API router.

Aggregates the domain routers under their path prefixes.  The
prefixes are part of the public contract (``/user/signup``,
``/messaging/getMessages`` and so on); do not version them without
coordinating with the clients.
"""

from fastapi import APIRouter

from .endpoints import messages, users

router = APIRouter()

router.include_router(users.router, prefix="/user", tags=["user"])
router.include_router(messages.router, prefix="/messaging", tags=["messaging"])


@router.get("/health", tags=["health"])
async def health() -> dict:
    """Liveness check; does not touch the database."""
    return {"status": "ok"}
