"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from worksync.boundary.db.CRUD import work_session_crud, work_session_item_crud

    # Use singleton instances
    work_session = await work_session_crud.get_with_items(db, session_id)

    # Or instantiate classes directly for custom behavior
    from worksync.boundary.db.CRUD import WorkSessionCRUD
    custom_crud = WorkSessionCRUD()
"""

from worksync.boundary.db.CRUD.base_crud import BaseCRUD
from worksync.boundary.db.CRUD.work_session_crud import WorkSessionCRUD, work_session_crud
from worksync.boundary.db.CRUD.work_session_item_crud import (
    WorkSessionItemCRUD,
    work_session_item_crud,
)

__all__ = [
    "BaseCRUD",
    "WorkSessionCRUD",
    "work_session_crud",
    "WorkSessionItemCRUD",
    "work_session_item_crud",
]
