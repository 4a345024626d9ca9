"""
Work session item ORM model.

Tracks checklist progress on one document within a work session.

Dependencies: sqlalchemy, worksync.boundary.db.base
System role: Per-document progress persistence
"""

import enum
from datetime import datetime
from uuid import UUID

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from worksync.boundary.db.base import Base, TimestampMixin, UUIDMixin


class WorkSessionItemStatus(str, enum.Enum):
    """
    Per-document progress states.

    PENDING: Created with the session, no progress written yet
    IN_PROGRESS: At least one progress write accepted
    COMPLETED: Terminal; set explicitly or when the session completes
    """

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class WorkSessionItemModel(Base, UUIDMixin, TimestampMixin):
    """
    Work session item ORM model.

    This row is the only shared mutable resource of the sync subsystem.
    Progress writes go through single conditional UPDATE statements in
    WorkSessionItemCRUD; updated_at doubles as the last-write-wins version.

    Attributes:
        id: UUID primary key (auto-generated)
        work_session_id: Owning session (cascade delete)
        document_id: External document identifier
        position: Order of the document within the session
        progress: Checklist map stepKey -> bool
        status: PENDING, IN_PROGRESS or COMPLETED
        started_at: First transition to IN_PROGRESS (UTC)
        completed_at: Transition to COMPLETED (UTC)

    Constraints:
        (work_session_id, document_id): UNIQUE; one item per document per session
    """

    __tablename__ = "work_session_items"
    __table_args__ = (
        UniqueConstraint(
            "work_session_id",
            "document_id",
            name="uq_work_session_items_session_document",
        ),
    )

    work_session_id: Mapped[UUID] = mapped_column(
        ForeignKey("work_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    document_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    progress: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        doc="Checklist progress map (stepKey -> completed)",
    )

    status: Mapped[WorkSessionItemStatus] = mapped_column(
        Enum(WorkSessionItemStatus, native_enum=False),
        nullable=False,
        default=WorkSessionItemStatus.PENDING,
    )

    started_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    work_session = relationship("WorkSessionModel", back_populates="items")
