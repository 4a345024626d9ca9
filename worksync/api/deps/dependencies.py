"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: worksync.configs, worksync.application, worksync.boundary
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from worksync.application.services import (
    SessionLifecycleService,
    SyncReconciliationService,
)
from worksync.boundary.db import get_async_db
from worksync.configs import Settings, get_settings


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_session_lifecycle_service(
    db: AsyncSession = Depends(get_async_db),
) -> SessionLifecycleService:
    """
    Get session lifecycle service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        SessionLifecycleService: Service bound to the request's session
    """
    return SessionLifecycleService(db=db)


def get_sync_service(db: AsyncSession = Depends(get_async_db)) -> SyncReconciliationService:
    """
    Get sync reconciliation service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        SyncReconciliationService: Service bound to the request's session
    """
    return SyncReconciliationService(db=db)
