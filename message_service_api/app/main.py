"""
Main entrypoint for the message service.

This module assembles the FastAPI application, sets up logging,
registers the error handlers that keep every failure inside the
request boundary and includes the message routes.  The ``create_app``
function builds and configures the app, which is then instantiated at
module import time as ``app``, e.g.::

    uvicorn message_service_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.responses import build_empty_response, build_error_response
from .api.router import router
from .core.config import settings
from .core.db import init_db
from .core.errors import StoreConnectionError
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create the messages table before the first request is served.
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Unmatched routes and methods answer with a bare 404, and a store
    that cannot be reached answers with a bare 500 before any request
    parameters are looked at.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
        redirect_slashes=False,
    )

    @app.exception_handler(StoreConnectionError)
    async def store_connection_error_handler(request: Request, exc: StoreConnectionError):
        logger.error("%s %s aborted, store unavailable: %s", request.method, request.url.path, exc)
        return build_empty_response(status.HTTP_500_INTERNAL_SERVER_ERROR)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            logger.info("No route for %s %s", request.method, request.url.path)
            return build_empty_response(status.HTTP_404_NOT_FOUND)
        return build_error_response(str(exc.detail), exc.status_code)

    app.include_router(router)

    return app


# Create the application instance at import time so that ASGI servers
# can reference ``message_service_api.app.main:app`` directly.
app = create_app()
