"""
Top-level package for the message service.

This file makes ``message_service_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``message_service_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
