"""
Application package initializer.

This package contains the main entrypoint for the service and its
submodules: the HTTP layer in ``api``, request parsing, storage and
rendering in ``services``, record definitions in ``schemas`` and
configuration, logging and database access in ``core``.
"""

from .main import app  # noqa: F401
