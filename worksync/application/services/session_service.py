"""
Session lifecycle service orchestrator.

Owns the WorkSession state machine: create (ACTIVE, items PENDING), item
progress writes (-> IN_PROGRESS / COMPLETED) and session completion
(ACTIVE -> COMPLETED, never back). Re-completing a COMPLETED session is
rejected with a conflict rather than treated as a no-op.

Dependencies: worksync.boundary.db.CRUD, worksync.boundary.db.models
System role: Work session use case orchestration
"""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from worksync.boundary.db.base import utcnow
from worksync.boundary.db.CRUD import work_session_crud, work_session_item_crud
from worksync.boundary.db.models import (
    WorkSessionItemModel,
    WorkSessionItemStatus,
    WorkSessionModel,
)
from worksync.core.exceptions import (
    NoActiveSessionError,
    SessionConflictError,
    SessionItemNotFoundError,
    SessionNotFoundError,
    ValidationError,
)
from worksync.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


def item_to_dict(item: WorkSessionItemModel) -> dict:
    """Serialize a WorkSessionItemModel for the API layer."""
    return {
        "id": item.id,
        "work_session_id": item.work_session_id,
        "document_id": item.document_id,
        "position": item.position,
        "progress": dict(item.progress or {}),
        "status": item.status,
        "started_at": item.started_at,
        "completed_at": item.completed_at,
        "updated_at": item.updated_at,
    }


def session_to_dict(work_session: WorkSessionModel) -> dict:
    """Serialize a WorkSessionModel (items loaded) for the API layer."""
    return {
        "id": work_session.id,
        "owner_id": work_session.owner_id,
        "title": work_session.title,
        "status": work_session.status,
        "created_at": work_session.created_at,
        "updated_at": work_session.updated_at,
        "completed_at": work_session.completed_at,
        "items": [item_to_dict(item) for item in work_session.items],
    }


class SessionLifecycleService:
    """Work session lifecycle orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize session service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def create_session(
        self,
        owner_id: str,
        document_ids: Sequence[str],
        title: str | None = None,
    ) -> dict:
        """
        Create an ACTIVE work session with one PENDING item per document.

        Session and items are written in the same transaction. Duplicate
        document ids collapse to a single item, keeping first-seen order.

        Args:
            owner_id: Owning user identity
            document_ids: Documents to work through
            title: Optional title, defaults to a creation-time label

        Returns:
            dict: Session data with items

        Raises:
            ValidationError: If owner_id is blank, document_ids is empty or
                contains a blank id
        """
        if not owner_id or not owner_id.strip():
            raise ValidationError("ownerId is required", field="owner_id")
        if not document_ids:
            raise ValidationError(
                "A work session needs at least one document",
                field="document_ids",
            )
        if any(not document_id or not document_id.strip() for document_id in document_ids):
            raise ValidationError("Document ids must be non-empty", field="document_ids")

        distinct_ids = list(dict.fromkeys(document_ids))
        title = title or f"Work session {utcnow():%Y-%m-%d %H:%M}"

        try:
            work_session = await work_session_crud.create_with_items(
                self.db,
                owner_id=owner_id,
                title=title,
                document_ids=distinct_ids,
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        log_with_context(
            logger,
            logging.INFO,
            "Work session created",
            session_id=work_session.id,
            owner_id=owner_id,
            item_count=len(distinct_ids),
        )
        return session_to_dict(work_session)

    async def get_session(self, session_id: UUID) -> dict:
        """
        Get work session by ID.

        Args:
            session_id: Session UUID

        Returns:
            dict: Session data with items

        Raises:
            SessionNotFoundError: If session not found
        """
        work_session = await work_session_crud.get_with_items(self.db, session_id)
        if work_session is None:
            raise SessionNotFoundError(str(session_id))
        return session_to_dict(work_session)

    async def get_active_session(self, owner_id: str) -> dict:
        """
        Get the owner's most recent ACTIVE session.

        Raises:
            NoActiveSessionError: If the owner has no open session
        """
        work_session = await work_session_crud.get_active_for_owner(self.db, owner_id)
        if work_session is None:
            raise NoActiveSessionError(owner_id)
        return session_to_dict(work_session)

    async def update_item_progress(
        self,
        session_id: UUID,
        document_id: str,
        progress: dict[str, bool],
        status: WorkSessionItemStatus | None = None,
    ) -> dict:
        """
        Write progress for the item of a (session, document) pair.

        The item moves to IN_PROGRESS, or to COMPLETED when requested.
        An item that is already COMPLETED keeps that status.

        Args:
            session_id: Session UUID
            document_id: Document identifier
            progress: Checklist map replacing the stored one
            status: Optional explicit target status (IN_PROGRESS or COMPLETED)

        Returns:
            dict: Updated item data

        Raises:
            ValidationError: If status is PENDING
            SessionItemNotFoundError: If no item exists for the pair
        """
        if status == WorkSessionItemStatus.PENDING:
            raise ValidationError("Items cannot be moved back to PENDING", field="status")

        target_status = status or WorkSessionItemStatus.IN_PROGRESS
        try:
            written = await work_session_item_crud.write_progress(
                self.db,
                session_id,
                document_id,
                progress,
                utcnow(),
                target_status=target_status,
            )
            if not written:
                raise SessionItemNotFoundError(str(session_id), document_id)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        item = await work_session_item_crud.get_by_pair(self.db, session_id, document_id)
        if item is None:
            # Deleted between the write and the read-back.
            raise SessionItemNotFoundError(str(session_id), document_id)
        return item_to_dict(item)

    async def complete_session(self, session_id: UUID) -> dict:
        """
        Complete an ACTIVE session and every item not yet COMPLETED.

        Args:
            session_id: Session UUID

        Returns:
            dict: Completed session data with items

        Raises:
            SessionNotFoundError: If session not found
            SessionConflictError: If the session is already COMPLETED
        """
        completed_at = utcnow()
        try:
            moved = await work_session_crud.mark_completed(self.db, session_id, completed_at)
            if not moved:
                if not await work_session_crud.exists(self.db, session_id):
                    raise SessionNotFoundError(str(session_id))
                raise SessionConflictError(
                    "Work session is already completed",
                    session_id=str(session_id),
                )
            closed_items = await work_session_item_crud.complete_all_for_session(
                self.db, session_id, completed_at
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        log_with_context(
            logger,
            logging.INFO,
            "Work session completed",
            session_id=session_id,
            closed_items=closed_items,
        )
        return await self.get_session(session_id)
