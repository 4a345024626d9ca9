"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - WorkSessionModel, WorkSessionItemModel: Core domain entities
  - WorkSessionStatus, WorkSessionItemStatus: Enum types for state tracking
  - work_session_crud, work_session_item_crud: CRUD operation singletons

Dependencies: sqlalchemy, worksync.configs
System role: Database adapter providing persistent storage for work sessions
and their per-document checklist progress.
"""

from worksync.boundary.db.base import Base, TimestampMixin, UUIDMixin, utcnow
from worksync.boundary.db.connection import (
    dispose_engine,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from worksync.boundary.db.models import (
    WorkSessionItemModel,
    WorkSessionItemStatus,
    WorkSessionModel,
    WorkSessionStatus,
)
from worksync.boundary.db.CRUD import (
    BaseCRUD,
    WorkSessionCRUD,
    WorkSessionItemCRUD,
    work_session_crud,
    work_session_item_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "utcnow",
    # Connection
    "dispose_engine",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "WorkSessionModel",
    "WorkSessionStatus",
    "WorkSessionItemModel",
    "WorkSessionItemStatus",
    # CRUD classes
    "BaseCRUD",
    "WorkSessionCRUD",
    "WorkSessionItemCRUD",
    # CRUD singletons
    "work_session_crud",
    "work_session_item_crud",
]
