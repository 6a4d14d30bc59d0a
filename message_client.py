"""Message service client.

This module defines a small client wrapper around the message service
HTTP API together with a command line front end.  The client uses the
``requests`` library internally and exposes one method per operation:

* :meth:`MessageServiceClient.post_message` – store a message.
* :meth:`MessageServiceClient.list_messages` – fetch the listing page,
  optionally bounded by ``before``/``after`` timestamps.
* :meth:`MessageServiceClient.list_user_messages` – fetch the listing
  page of a single author.

Every method returns a tuple ``(data, error)``; exactly one of the two
is ``None``.  Errors are dictionaries with ``status_code`` and
``message`` keys.

Usage::

    python message_client.py post "hello" --username alice
    python message_client.py list --after 1700000000
    python message_client.py user alice
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:8000"


class MessageServiceClient:
    """Client for interacting with the message service."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the client.

        Args:
            base_url: Base URL of the service, e.g. ``http://localhost:8000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        data: Dict[str, Any] | None = None
    ) -> Tuple[Optional[requests.Response], Optional[Dict[str, Any]]]:
        """Perform an HTTP request to the service.

        Args:
            method: HTTP method (``GET`` or ``POST``).
            path: Path relative to :attr:`base_url` (e.g. ``/user``).
            params: Query parameters to include in the request.
            data: Form fields to send as an url-encoded body.
        Returns:
            A tuple ``(response, error)``.  On failure ``response`` is
            ``None`` and ``error`` describes the issue.  The message is
            taken from the ``error`` field of a JSON error body when there
            is one.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                data=data,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None and exc.response.content:
                try:
                    message = exc.response.json().get("error", "")
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("Request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("Request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def post_message(self, message: str, username: Optional[str] = None) -> Tuple[Optional[int], Optional[Dict[str, Any]]]:
        """Store a message and return the timestamp assigned by the service."""
        form = {"message": message}
        if username is not None:
            form["username"] = username
        response, error = self._request("POST", "/", data=form)
        if error:
            return None, error
        return response.json()["timestamp"], None

    def list_messages(
        self, before: Optional[int] = None, after: Optional[int] = None
    ) -> Tuple[Optional[str], Optional[Dict[str, Any]]]:
        """Fetch the HTML listing, optionally bounded by timestamps."""
        params = {}
        if before is not None:
            params["before"] = before
        if after is not None:
            params["after"] = after
        response, error = self._request("GET", "/", params=params or None)
        if error:
            return None, error
        return response.text, None

    def list_user_messages(self, username: str) -> Tuple[Optional[str], Optional[Dict[str, Any]]]:
        """Fetch the HTML listing of messages posted by ``username``."""
        response, error = self._request("GET", "/user", params={"username": username})
        if error:
            return None, error
        return response.text, None


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Post and list messages on a message service.")
    ap.add_argument(
        "--url",
        default=os.getenv("MESSAGE_SERVICE_URL", DEFAULT_BASE_URL),
        help="Base URL of the service (default: $MESSAGE_SERVICE_URL or %(default)s)",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    post = sub.add_parser("post", help="Post a message")
    post.add_argument("message")
    post.add_argument("--username", help="Author name; the service uses 'unknown' when omitted")

    listing = sub.add_parser("list", help="List messages, optionally within a time window")
    listing.add_argument("--before", type=int, help="Only messages strictly older than this epoch second")
    listing.add_argument("--after", type=int, help="Only messages strictly newer than this epoch second")

    user = sub.add_parser("user", help="List the messages of one user")
    user.add_argument("username")

    args = ap.parse_args(argv)
    client = MessageServiceClient(base_url=args.url)

    if args.command == "post":
        result, error = client.post_message(args.message, args.username)
    elif args.command == "list":
        result, error = client.list_messages(before=args.before, after=args.after)
    else:
        result, error = client.list_user_messages(args.username)

    if error:
        print(f"[!] {error['message']}", file=sys.stderr)
        return 1
    print(result)
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    sys.exit(main())
