"""
Message endpoints.

``POST /`` stores a message posted as a form, ``GET /`` lists messages
optionally bounded by ``before``/``after`` timestamps and ``GET /user``
lists the messages of one author.  Each route acquires its store
connection through ``get_db`` before any parsing happens, then runs
parse, query and respond in order, stopping at the first failure.
"""

import logging
import sqlite3

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import Response

from message_service_api.app.api.responses import (
    build_empty_response,
    build_error_response,
    build_insert_response,
    build_list_response,
)
from message_service_api.app.core.db import get_db
from message_service_api.app.core.errors import MessageValidationError, StoreError
from message_service_api.app.services.message_service import MessageService
from message_service_api.app.services.parsers import (
    parse_new_message,
    parse_time_range,
    parse_username,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/")
async def post_message(request: Request, conn: sqlite3.Connection = Depends(get_db)) -> Response:
    """Store a message.

    The body must be form encoded with a non-empty ``message`` and may
    carry a ``username``.  Returns the timestamp assigned by the store.
    """
    body = await request.body()
    try:
        new_message = parse_new_message(body)
    except MessageValidationError as exc:
        logger.warning("Rejected new message: %s", exc.message)
        return build_error_response(exc.message)
    try:
        timestamp = await MessageService.insert_message(conn, new_message)
    except StoreError:
        return build_error_response("service error", status.HTTP_500_INTERNAL_SERVER_ERROR)
    return build_insert_response(timestamp)


@router.get("/")
async def list_messages(request: Request, conn: sqlite3.Connection = Depends(get_db)) -> Response:
    """List all messages, optionally only those between ``after`` and ``before``."""
    try:
        time_range = parse_time_range(request.url.query)
    except MessageValidationError as exc:
        logger.warning("Rejected time range: %s", exc.message)
        return build_error_response(exc.message)
    try:
        messages = await MessageService.select_by_time_range(conn, time_range)
    except StoreError:
        messages = None
    return build_list_response(messages)


@router.get("/user")
async def list_user_messages(request: Request, conn: sqlite3.Connection = Depends(get_db)) -> Response:
    """List the messages posted by ``username``.

    A request without any query string is answered with a bare 404.
    """
    query = request.url.query
    if not query:
        return build_empty_response(status.HTTP_404_NOT_FOUND)
    try:
        username = parse_username(query)
    except MessageValidationError as exc:
        logger.warning("Rejected user lookup: %s", exc.message)
        return build_error_response(exc.message)
    try:
        messages = await MessageService.select_by_username(conn, username)
    except StoreError:
        messages = None
    return build_list_response(messages)
