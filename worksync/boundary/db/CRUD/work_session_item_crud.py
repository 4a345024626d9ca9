"""
Work session item CRUD operations.

Every progress mutation of a WorkSessionItem is a single conditional UPDATE
keyed by (work_session_id, document_id). When a version is supplied the
statement is a compare-and-swap on updated_at: once progress has been
written (started_at or completed_at set) it only matches while the stored updated_at is not
newer than the incoming version, which is the one concurrency-control
mechanism for this row.

Dependencies: sqlalchemy, worksync.boundary.db.models
System role: Item persistence and last-write-wins storage primitive
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, and_, case, func, literal, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from worksync.boundary.db.CRUD.base_crud import BaseCRUD
from worksync.boundary.db.models import WorkSessionItemModel, WorkSessionItemStatus

_STATUS_TYPE = WorkSessionItemModel.__table__.c.status.type
_TIMESTAMP_TYPE = DateTime(timezone=True)


class WorkSessionItemCRUD(BaseCRUD[WorkSessionItemModel]):
    """
    CRUD operations for WorkSessionItemModel.

    Extends BaseCRUD with pair lookups and the atomic progress writes used by
    both the lifecycle service and the sync reconciliation endpoint.
    """

    def __init__(self) -> None:
        """Initialize WorkSessionItemCRUD with WorkSessionItemModel."""
        super().__init__(WorkSessionItemModel)

    async def get_by_pair(
        self,
        session: AsyncSession,
        work_session_id: UUID,
        document_id: str,
    ) -> WorkSessionItemModel | None:
        """
        Retrieve the unique item of a (session, document) pair.

        Args:
            session: Async database session
            work_session_id: Owning session UUID
            document_id: Document identifier

        Returns:
            WorkSessionItemModel if found, None otherwise
        """
        stmt = (
            select(WorkSessionItemModel)
            .where(
                WorkSessionItemModel.work_session_id == work_session_id,
                WorkSessionItemModel.document_id == document_id,
            )
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def write_progress(
        self,
        session: AsyncSession,
        work_session_id: UUID,
        document_id: str,
        progress: dict[str, bool],
        version: datetime,
        *,
        target_status: WorkSessionItemStatus = WorkSessionItemStatus.IN_PROGRESS,
        only_if_not_older: bool = False,
    ) -> bool:
        """
        Atomically write progress for a (session, document) pair.

        COMPLETED is terminal: the status column keeps COMPLETED whatever
        target_status says. started_at is stamped on the first write and
        completed_at when the item first becomes COMPLETED.

        Args:
            session: Async database session
            work_session_id: Owning session UUID
            document_id: Document identifier
            progress: New checklist map, replaces the stored one
            version: Timestamp stored as updated_at
            target_status: IN_PROGRESS or COMPLETED
            only_if_not_older: Compare-and-swap; skip when progress was already
                written at an updated_at later than version. An item with
                neither progress nor completion carries only its creation
                time, which a lagging client clock must not lose to.

        Returns:
            True if a row was written, False if missing or the guard rejected it
        """
        item = WorkSessionItemModel
        stamp = literal(version, _TIMESTAMP_TYPE)
        already_completed = item.status == WorkSessionItemStatus.COMPLETED
        becomes_completed = target_status == WorkSessionItemStatus.COMPLETED

        stmt = (
            update(item)
            .where(
                item.work_session_id == work_session_id,
                item.document_id == document_id,
            )
            .values(
                progress=progress,
                updated_at=version,
                status=case(
                    (already_completed, literal(WorkSessionItemStatus.COMPLETED, _STATUS_TYPE)),
                    else_=literal(target_status, _STATUS_TYPE),
                ),
                started_at=func.coalesce(item.started_at, stamp),
                completed_at=(
                    func.coalesce(item.completed_at, stamp)
                    if becomes_completed
                    else item.completed_at
                ),
            )
            .execution_options(synchronize_session=False)
        )
        if only_if_not_older:
            stmt = stmt.where(
                or_(
                    and_(item.started_at.is_(None), item.completed_at.is_(None)),
                    item.updated_at <= version,
                )
            )

        result = await session.execute(stmt)
        return result.rowcount > 0

    async def complete_all_for_session(
        self,
        session: AsyncSession,
        work_session_id: UUID,
        completed_at: datetime,
    ) -> int:
        """
        Mark every not-yet-completed item of a session COMPLETED.

        Args:
            session: Async database session
            work_session_id: Owning session UUID
            completed_at: Completion timestamp (UTC)

        Returns:
            Number of items transitioned
        """
        item = WorkSessionItemModel
        stmt = (
            update(item)
            .where(
                item.work_session_id == work_session_id,
                item.status != WorkSessionItemStatus.COMPLETED,
            )
            .values(
                status=WorkSessionItemStatus.COMPLETED,
                completed_at=completed_at,
                updated_at=completed_at,
            )
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount


work_session_item_crud = WorkSessionItemCRUD()
