"""
FastAPI dependencies that hand the services to the handlers.

The services are built once in ``main.create_app`` and stored on
``app.state``; tests swap them out through ``app.dependency_overrides``.
"""

from fastapi import Request

from ..services.message_service import MessageService
from ..services.user_service import UserService


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_message_service(request: Request) -> MessageService:
    return request.app.state.message_service
