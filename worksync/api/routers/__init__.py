"""API routers."""

from .health import router as health_router
from .sessions import router as sessions_router
from .sync import router as sync_router

__all__ = [
    "health_router",
    "sessions_router",
    "sync_router",
]
