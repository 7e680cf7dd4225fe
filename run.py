"""Entry point for the chat accounts API.

Starts the FastAPI application under uvicorn.  It is intended to be
executed from the project root, for example under Docker, where only a
single Python file is specified.

Configuration (``MONGO_URI``, ``MONGO_DB_NAME``, ``API_HOST``,
``API_PORT``, ``LOG_LEVEL`` ...) is read from environment variables;
see ``chat_accounts_api/app/core/config.py`` for the full list.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from chat_accounts_api.app.core.config import settings
from chat_accounts_api.app.main import app


async def run_api() -> None:
    """Serve the API on ``settings.api_host``:``settings.api_port``."""
    config = Config(
        app=app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


async def main() -> None:
    logging.getLogger(__name__).info("Starting %s on %s:%s", settings.project_name, settings.api_host, settings.api_port)
    await run_api()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
