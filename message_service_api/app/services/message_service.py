"""
Service layer for stored messages.

``MessageService`` translates domain operations into parameterized
queries against the ``messages`` table.  Every method receives the
request's connection so that acquisition happens once per request in
the API layer.  Database failures are logged and re-raised as
``StoreError``; an empty result is a plain empty list.
"""

import logging
import sqlite3
from typing import List

from message_service_api.app.core.errors import StoreError
from message_service_api.app.schemas.message import Message, NewMessage, TimeRange

logger = logging.getLogger(__name__)

SELECT_MESSAGES = "SELECT id, username, message, timestamp FROM messages"


class MessageService:
    """Gateway between the API handlers and the message store."""

    @classmethod
    async def insert_message(cls, conn: sqlite3.Connection, data: NewMessage) -> int:
        """Insert a new message and return the timestamp assigned by the store.

        The insert and the read-back of the timestamp run in one
        transaction which is rolled back on failure, so a failed call
        never leaves a row behind.
        """
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO messages (username, message) VALUES (?, ?)",
                (data.username, data.message),
            )
            message_id = cursor.lastrowid
            row = cursor.execute(
                "SELECT timestamp FROM messages WHERE id = ?",
                (message_id,),
            ).fetchone()
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            logger.error("Error writing to database: %s", exc)
            raise StoreError(str(exc)) from exc
        logger.info("Stored message %s from %s", message_id, data.username)
        return row["timestamp"]

    @classmethod
    async def select_by_time_range(cls, conn: sqlite3.Connection, time_range: TimeRange) -> List[Message]:
        """Return messages strictly between the bounds of ``time_range``.

        Absent bounds are left out of the WHERE clause, so the query takes
        one of four forms: both bounds, only ``before``, only ``after`` or
        no filter at all.
        """
        query = SELECT_MESSAGES
        params: list = []
        where_clauses: list[str] = []
        if time_range.before is not None:
            where_clauses.append("timestamp < ?")
            params.append(time_range.before)
        if time_range.after is not None:
            where_clauses.append("timestamp > ?")
            params.append(time_range.after)
        if where_clauses:
            query += " WHERE " + " AND ".join(where_clauses)
        return cls._fetch_messages(conn, query, tuple(params))

    @classmethod
    async def select_by_username(cls, conn: sqlite3.Connection, username: str) -> List[Message]:
        """Return every message posted under exactly ``username``."""
        return cls._fetch_messages(conn, SELECT_MESSAGES + " WHERE username = ?", (username,))

    @classmethod
    def _fetch_messages(cls, conn: sqlite3.Connection, query: str, params: tuple) -> List[Message]:
        try:
            rows = conn.execute(query, params).fetchall()
        except sqlite3.Error as exc:
            logger.error("Error querying DB: %s", exc)
            raise StoreError(str(exc)) from exc
        return [cls._row_to_message(row) for row in rows]

    @staticmethod
    def _row_to_message(row: sqlite3.Row) -> Message:
        """Convert a database row to a ``Message`` schema instance."""
        return Message(
            id=row["id"],
            username=row["username"],
            message=row["message"],
            timestamp=row["timestamp"],
        )
