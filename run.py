"""Entry point for the message service.

Launches the FastAPI application under Uvicorn.  Host, port, database
location and log level are taken from environment variables (``HOST``,
``PORT``, ``DATABASE_URL``, ``LOG_LEVEL``); see
``message_service_api/app/core/config.py`` for the defaults.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from message_service_api.app.core.config import settings
from message_service_api.app.main import app


async def main() -> None:
    """Serve the application until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("Running message service at %s:%s", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
