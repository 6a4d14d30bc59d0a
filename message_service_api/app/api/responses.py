"""
Response builders.

Each builder turns a domain result into a complete HTTP response with
status code, content type and body.  Listings are HTML; inserts and
errors are JSON.  Every response is logged at DEBUG level.
"""

import logging
from typing import List, Optional

from fastapi import status
from fastapi.responses import HTMLResponse, JSONResponse, Response

from message_service_api.app.schemas.message import ErrorBody, InsertResult, Message
from message_service_api.app.services.rendering import render_page

logger = logging.getLogger(__name__)


def _log(response: Response) -> Response:
    logger.debug("Response %s %s", response.status_code, response.headers.get("content-type"))
    return response


def build_insert_response(timestamp: int) -> Response:
    """Return ``{"timestamp": <int>}`` with status 200."""
    payload = InsertResult(timestamp=timestamp)
    return _log(JSONResponse(content={"timestamp": payload.timestamp}))


def build_list_response(messages: Optional[List[Message]]) -> Response:
    """Render a listing page, or a bare 500 when the query failed.

    ``None`` signals a store failure and is distinct from an empty list,
    which renders the "No messages found" page with status 200.
    """
    if messages is None:
        return build_empty_response(status.HTTP_500_INTERNAL_SERVER_ERROR)
    return _log(HTMLResponse(content=render_page(messages)))


def build_error_response(message: str, status_code: int = status.HTTP_400_BAD_REQUEST) -> Response:
    """Return ``{"error": <message>}`` with the given status."""
    payload = ErrorBody(error=message)
    return _log(JSONResponse(status_code=status_code, content={"error": payload.error}))


def build_empty_response(status_code: int) -> Response:
    """Return a response with only a status code and no body."""
    return _log(Response(status_code=status_code))
