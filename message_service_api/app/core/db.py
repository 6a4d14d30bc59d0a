"""
SQLite database integration.

This module provides functions for obtaining a database connection
(``get_connection``), a request-scoped FastAPI dependency (``get_db``)
and ``init_db`` which creates the ``messages`` table on application
start.  Timestamps are assigned by the database through the column
default, never by the service.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import AsyncIterator, Iterator

from .config import settings
from .errors import StoreConnectionError

logger = logging.getLogger(__name__)

SQLITE_URL_PREFIX = "sqlite:///"

SCHEMA = """
CREATE TABLE IF NOT EXISTS messages (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL,
    message TEXT NOT NULL,
    timestamp INTEGER NOT NULL DEFAULT (CAST(strftime('%s', 'now') AS INTEGER))
);

CREATE INDEX IF NOT EXISTS idx_messages_username ON messages(username);
CREATE INDEX IF NOT EXISTS idx_messages_timestamp ON messages(timestamp);
"""


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    ``settings.database_url`` may be a plain path or a ``sqlite:///``
    URL.  Absolute paths are used directly, relative ones are resolved
    against the project root.
    """
    db_url = settings.database_url
    if db_url.startswith(SQLITE_URL_PREFIX):
        db_url = db_url[len(SQLITE_URL_PREFIX):]
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # message_service_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Open a new connection to the message store.

    Rows are returned as ``sqlite3.Row`` so columns can be read by
    name.  Raises ``StoreConnectionError`` when the database cannot be
    opened.
    """
    db_path = get_database_path()
    try:
        conn = sqlite3.connect(db_path)
    except sqlite3.Error as exc:
        logger.error("Error connecting to database %s: %s", db_path, exc)
        raise StoreConnectionError(str(exc)) from exc
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


async def get_db() -> AsyncIterator[sqlite3.Connection]:
    """FastAPI dependency providing one connection per request.

    The connection is acquired before the route body runs and closed on
    every exit path, including validation failures.
    """
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


def init_db() -> None:
    """Create the ``messages`` table and its indexes if they are missing."""
    with get_cursor() as cursor:
        cursor.executescript(SCHEMA)
    logger.info("Message store ready at %s", get_database_path())
