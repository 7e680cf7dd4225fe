"""
Main entrypoint for the chat accounts API.

``create_app`` is the composition root: it configures logging, opens
the MongoDB client, builds one ``UserService`` and one
``MessageService`` over their collections, stores them on
``app.state`` and mounts the routers.  Nothing else in the package
holds global state.  The module-level ``app`` lets uvicorn discover
the application::

    uvicorn chat_accounts_api.app.main:app --reload

Tests call ``create_app(database=...)`` with an in-memory database so
no server is needed.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from pymongo.database import Database

from .api.router import router
from .core.config import Settings, settings
from .core.db import create_client, get_database, init_db
from .core.logging_config import setup_logging
from .services.message_service import MessageService
from .services.user_service import UserService

logger = logging.getLogger(__name__)


def create_app(database: Optional[Database] = None, app_settings: Settings = settings) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    database : Optional[Database]
        Database to serve from.  When omitted, a client is created from
        ``app_settings.mongo_uri`` and closed again on shutdown.  An
        injected database is never closed by the app.
    app_settings : Settings
        Configuration to use; defaults to the environment-derived
        ``settings``.

    Returns
    -------
    FastAPI
        A configured application instance.
    """
    # Logging first so the client creation below is logged.
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    client = None
    if database is None:
        client = create_client(app_settings)
        database = get_database(client, app_settings)

    app = FastAPI(title=app_settings.project_name, version=app_settings.api_version, debug=app_settings.debug)
    app.state.user_service = UserService(database[app_settings.user_collection])
    app.state.message_service = MessageService(database[app_settings.message_collection])

    app.include_router(router)

    @app.on_event("startup")
    async def startup_event() -> None:
        await run_in_threadpool(init_db, database, app_settings)
        logger.info("%s %s ready", app_settings.project_name, app_settings.api_version)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        if client is not None:
            client.close()

    return app


app = create_app()
