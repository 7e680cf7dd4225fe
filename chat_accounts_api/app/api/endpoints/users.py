"""
User endpoints.

Routes for signup, login, lookup, deletion and password reset, mounted
under ``/user``.  Each handler validates the request, calls exactly
one ``UserService`` operation and maps the result to a response:

* success: 200 with the user (never the password) as JSON;
* invalid body: 400;
* any service error or unexpected exception: 500.

The 400 and 500 bodies differ between routes (plain text on most,
JSON on signup errors and on the reset-password 400).  Existing
clients match on these exact bodies, so they are kept as they are.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from ...core.result import Err
from ...schemas.user import SafeUser, UserCredentials
from ...services.user_service import UserService
from ..deps import get_user_service
from ..validation import is_user_body_valid, read_json_body

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_USER_BODY = "Invalid user body"


def user_response(user: SafeUser) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_200_OK, content=jsonable_encoder(user, by_alias=True))


def server_error(message: str) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.post("/signup")
async def create_user(request: Request, users: UserService = Depends(get_user_service)) -> Response:
    """Register a new user from ``{username, password}``."""
    body = await read_json_body(request)
    if not is_user_body_valid(body):
        return PlainTextResponse(INVALID_USER_BODY, status_code=status.HTTP_400_BAD_REQUEST)

    try:
        result = await users.save_user(str(body["username"]), str(body["password"]))
        return user_response(result.unwrap())
    except Exception as exc:
        logger.error("Signup failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=Err(f"Error saving user: {exc}").to_dict(),
        )


@router.post("/login")
async def user_login(request: Request, users: UserService = Depends(get_user_service)) -> Response:
    """Check credentials and return the matching user.

    Failures are reported only as ``Login failed``; the reason is
    logged but not sent to the client.
    """
    try:
        body = await read_json_body(request)
        if not is_user_body_valid(body):
            return PlainTextResponse(INVALID_USER_BODY, status_code=status.HTTP_400_BAD_REQUEST)

        credentials = UserCredentials(username=str(body["username"]), password=str(body["password"]))
        result = await users.login_user(credentials)
        return user_response(result.unwrap())
    except Exception as exc:
        logger.info("Login failed: %s", exc)
        return server_error("Login failed")


@router.get("/getUser/{username}")
async def get_user(username: str, users: UserService = Depends(get_user_service)) -> Response:
    try:
        result = await users.get_user_by_username(username)
        return user_response(result.unwrap())
    except Exception as exc:
        return server_error(f"Error when getting user by username: {exc}")


@router.delete("/deleteUser/{username}")
async def delete_user(username: str, users: UserService = Depends(get_user_service)) -> Response:
    """Delete a user and return the deleted record."""
    try:
        result = await users.delete_user_by_username(username)
        return user_response(result.unwrap())
    except Exception as exc:
        return server_error(f"Error when deleting user by username: {exc}")


@router.put("/resetPassword")
async def reset_password(request: Request, users: UserService = Depends(get_user_service)) -> Response:
    """Replace a user's password with the one in the body."""
    try:
        body = await read_json_body(request)
        if not is_user_body_valid(body):
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=Err(INVALID_USER_BODY).to_dict(),
            )

        result = await users.update_user(str(body["username"]), {"password": str(body["password"])})
        return user_response(result.unwrap())
    except Exception as exc:
        return server_error(f"Error when updating user password: {exc}")
