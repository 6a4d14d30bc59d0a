"""
HTML rendering of message listings.

``render_page`` is a pure function from a list of messages to markup.
Text fields are autoescaped by Jinja2 so stored messages cannot inject
markup into the page.
"""

from datetime import datetime, timezone
from typing import List

from jinja2 import Environment, PackageLoader, select_autoescape

from message_service_api.app.schemas.message import Message

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_timestamp(timestamp: int) -> str:
    """Render epoch seconds as a UTC ``YYYY-MM-DD HH:MM:SS`` string."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime(TIMESTAMP_FORMAT)


_env = Environment(
    loader=PackageLoader("message_service_api.app", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["datetime"] = format_timestamp


def render_page(messages: List[Message]) -> str:
    """Render the listing page; an empty list shows "No messages found"."""
    return _env.get_template("messages.html").render(messages=messages)
