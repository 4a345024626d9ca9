"""
Database models package.

Exports:
  - WorkSessionModel, WorkSessionStatus: Work session ORM model and status enum
  - WorkSessionItemModel, WorkSessionItemStatus: Item ORM model and status enum

Dependencies: sqlalchemy, worksync.boundary.db.base
System role: Database model definitions for domain entities
"""

from worksync.boundary.db.models.work_session_model import (
    WorkSessionModel,
    WorkSessionStatus,
)
from worksync.boundary.db.models.work_session_item_model import (
    WorkSessionItemModel,
    WorkSessionItemStatus,
)

__all__ = [
    "WorkSessionModel",
    "WorkSessionStatus",
    "WorkSessionItemModel",
    "WorkSessionItemStatus",
]
