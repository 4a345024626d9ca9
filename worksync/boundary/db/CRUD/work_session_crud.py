"""
Work session CRUD operations.

Provides create-with-items, eager reads and the guarded ACTIVE -> COMPLETED
transition for WorkSessionModel.

Dependencies: sqlalchemy, worksync.boundary.db.models
System role: Work session persistence operations
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from worksync.boundary.db.CRUD.base_crud import BaseCRUD
from worksync.boundary.db.models import (
    WorkSessionItemModel,
    WorkSessionModel,
    WorkSessionStatus,
)


class WorkSessionCRUD(BaseCRUD[WorkSessionModel]):
    """
    CRUD operations for WorkSessionModel.

    Extends BaseCRUD with item-aware creation, eager loading of items and
    the conditional completion update.
    """

    def __init__(self) -> None:
        """Initialize WorkSessionCRUD with WorkSessionModel."""
        super().__init__(WorkSessionModel)

    async def create_with_items(
        self,
        session: AsyncSession,
        owner_id: str,
        title: str,
        document_ids: Sequence[str],
    ) -> WorkSessionModel:
        """
        Create a session and one PENDING item per document in one flush.

        Args:
            session: Async database session
            owner_id: Owning user identity
            title: Session title
            document_ids: Distinct document identifiers, in display order

        Returns:
            WorkSessionModel with items loaded
        """
        work_session = WorkSessionModel(
            owner_id=owner_id,
            title=title,
            status=WorkSessionStatus.ACTIVE,
            items=[
                WorkSessionItemModel(document_id=document_id, position=position)
                for position, document_id in enumerate(document_ids)
            ],
        )
        session.add(work_session)
        await session.flush()
        return await self.get_with_items(session, work_session.id)

    async def get_with_items(
        self,
        session: AsyncSession,
        id: UUID,
    ) -> WorkSessionModel | None:
        """
        Retrieve session with eagerly loaded items.

        Args:
            session: Async database session
            id: Session UUID

        Returns:
            WorkSessionModel with items loaded, None if not found
        """
        stmt = (
            select(WorkSessionModel)
            .where(WorkSessionModel.id == id)
            .options(selectinload(WorkSessionModel.items))
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active_for_owner(
        self,
        session: AsyncSession,
        owner_id: str,
    ) -> WorkSessionModel | None:
        """
        Retrieve the most recently created ACTIVE session of an owner.

        Args:
            session: Async database session
            owner_id: Owning user identity

        Returns:
            WorkSessionModel with items loaded, None if the owner has none open
        """
        stmt = (
            select(WorkSessionModel)
            .where(
                WorkSessionModel.owner_id == owner_id,
                WorkSessionModel.status == WorkSessionStatus.ACTIVE,
            )
            .options(selectinload(WorkSessionModel.items))
            .order_by(WorkSessionModel.created_at.desc())
            .limit(1)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def mark_completed(
        self,
        session: AsyncSession,
        id: UUID,
        completed_at: datetime,
    ) -> bool:
        """
        Transition an ACTIVE session to COMPLETED.

        The status predicate makes the transition a single atomic check,
        so two concurrent completions cannot both succeed.

        Args:
            session: Async database session
            id: Session UUID
            completed_at: Completion timestamp (UTC)

        Returns:
            True if the row moved to COMPLETED, False if missing or not ACTIVE
        """
        stmt = (
            update(WorkSessionModel)
            .where(
                WorkSessionModel.id == id,
                WorkSessionModel.status == WorkSessionStatus.ACTIVE,
            )
            .values(status=WorkSessionStatus.COMPLETED, completed_at=completed_at)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount > 0


work_session_crud = WorkSessionCRUD()
