"""
Exception hierarchy for the message service.

Validation errors are raised by the request parsers before any store
access.  Store errors are raised by the gateway once a connection has
been acquired.  Connection errors are raised while acquiring the
per-request connection.  The API layer turns each of them into exactly
one HTTP response.
"""


class MessageServiceError(Exception):
    """Base class for all errors raised by the service."""


class StoreConnectionError(MessageServiceError):
    """The message store could not be reached."""


class StoreError(MessageServiceError):
    """An insert or select failed after the connection was acquired."""


class MessageValidationError(MessageServiceError):
    """Client supplied input was rejected before reaching the store."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class MissingField(MessageValidationError):
    """A required form or query field was absent (or empty)."""

    def __init__(self, field: str) -> None:
        super().__init__(field, f"Missing field '{field}'")


class InvalidParameter(MessageValidationError):
    """A field was present but its value could not be parsed."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(field, f"Error parsing '{field}': invalid integer {value!r}")
        self.value = value
