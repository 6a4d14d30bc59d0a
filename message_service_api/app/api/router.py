"""
Top-level router for the service.

The message routes live at the root of the URL space (``/`` and
``/user``), so the message router is included without a prefix.
"""

from fastapi import APIRouter

from .endpoints import messages

router = APIRouter()

router.include_router(messages.router, tags=["messages"])
