"""FastAPI dependency factories."""

from worksync.api.deps.dependencies import (
    get_session_lifecycle_service,
    get_settings_dependency,
    get_sync_service,
)

__all__ = [
    "get_session_lifecycle_service",
    "get_settings_dependency",
    "get_sync_service",
]
