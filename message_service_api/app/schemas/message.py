"""
Pydantic schemas for stored messages and request inputs.

``Message`` mirrors a row of the ``messages`` table.  ``NewMessage``
and ``TimeRange`` are transient records built by the request parsers
and consumed once by the gateway.  ``InsertResult`` and ``ErrorBody``
describe the JSON payloads returned to clients.
"""

from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_USERNAME = "unknown"


class Message(BaseModel):
    """A stored message as read back from the database."""

    id: int
    username: str
    message: str
    timestamp: int = Field(..., description="Seconds since the epoch, assigned by the store")


class NewMessage(BaseModel):
    """Schema for a message about to be inserted."""

    username: str = Field(DEFAULT_USERNAME, description="Author name; defaults to 'unknown'")
    message: str = Field(..., description="Text content of the message")


class TimeRange(BaseModel):
    """Optional exclusive bounds on message timestamps.

    Both bounds present means ``after < timestamp < before``.  A single
    bound only applies that side; no bounds match every message.
    """

    before: Optional[int] = None
    after: Optional[int] = None


class InsertResult(BaseModel):
    timestamp: int


class ErrorBody(BaseModel):
    error: str
