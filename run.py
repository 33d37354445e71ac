"""Entry point for the User Registry API.

Starts the FastAPI application under uvicorn.  Intended to be executed
from the project root, for example inside a container where only a
single Python file is specified::

    python run.py

Host, port and log level come from the environment (``HOST``, ``PORT``
and ``LOG_LEVEL``); see ``user_registry_api/app/core/config.py`` for the
full list of supported variables.
"""
import asyncio
import logging

from uvicorn import Config, Server

from user_registry_api.app.core.config import settings
from user_registry_api.app.core.logging_config import resolve_level, setup_logging
from user_registry_api.app.main import app


async def run_api() -> None:
    """Serve the API until the server is stopped."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=logging.getLevelName(resolve_level(settings.log_level, settings.debug)).lower(),
    )
    server = Server(config)
    await server.serve()


async def main() -> None:
    setup_logging(settings.log_level, settings.log_file or None, settings.debug)
    logging.getLogger(__name__).info("Starting %s on %s:%s", settings.project_name, settings.host, settings.port)
    await run_api()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
