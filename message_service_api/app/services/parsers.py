"""
Request parsers.

Pure functions turning raw form-encoded bytes or query strings into
the typed records consumed by the gateway.  Each parser raises a
``MessageValidationError`` subclass naming the offending field.  When
a key is repeated the last value wins.
"""

import re
from typing import Dict, Optional, Union
from urllib.parse import parse_qsl

from message_service_api.app.core.errors import InvalidParameter, MissingField
from message_service_api.app.schemas.message import DEFAULT_USERNAME, NewMessage, TimeRange

# Signed 64-bit range accepted for timestamp bounds
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_form(data: Union[bytes, str, None]) -> Dict[str, str]:
    """Decode form-encoded key/value pairs into a dictionary."""
    if not data:
        return {}
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")
    return dict(parse_qsl(data, keep_blank_values=True))


def _parse_int64(name: str, raw: str) -> int:
    if not _INTEGER_RE.fullmatch(raw):
        raise InvalidParameter(name, raw)
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidParameter(name, raw)
    return value


def parse_new_message(body: bytes) -> NewMessage:
    """Build a ``NewMessage`` from a form-encoded request body.

    ``message`` is required and must be non-empty.  ``username`` is
    optional; when absent or empty it defaults to ``"unknown"``.
    """
    form = parse_form(body)
    message = form.get("message")
    if not message:
        raise MissingField("message")
    username = form.get("username") or DEFAULT_USERNAME
    return NewMessage(username=username, message=message)


def parse_time_range(query: Optional[str]) -> TimeRange:
    """Parse optional ``before``/``after`` integer bounds from a query string.

    ``before`` is validated first, so when both are malformed the error
    names ``before``.  A missing query string yields the match-all range.
    """
    args = parse_form(query)
    before = args.get("before")
    if before is not None:
        before = _parse_int64("before", before)
    after = args.get("after")
    if after is not None:
        after = _parse_int64("after", after)
    return TimeRange(before=before, after=after)


def parse_username(query: str) -> str:
    """Return the ``username`` query parameter; presence is the only rule."""
    args = parse_form(query)
    if "username" not in args:
        raise MissingField("username")
    return args["username"]
