"""
Work session ORM model.

Represents one user's attempt to work through a set of documents.
Owns the per-document WorkSessionItem rows created with it.

Dependencies: sqlalchemy, worksync.boundary.db.base
System role: Work session persistence for checklist progress tracking
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from worksync.boundary.db.base import Base, TimestampMixin, UUIDMixin


class WorkSessionStatus(str, enum.Enum):
    """
    Work session lifecycle states.

    ACTIVE: Session open; items accept progress writes
    COMPLETED: Session closed; terminal, completed_at is set
    """

    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class WorkSessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Work session ORM model.

    Status only moves ACTIVE -> COMPLETED, and completed_at is non-null
    exactly when status is COMPLETED. Cascade delete removes the items.

    Attributes:
        id: UUID primary key (auto-generated)
        owner_id: Identity of the acting user (resolved by the auth gate)
        title: Human-readable label
        status: ACTIVE or COMPLETED
        completed_at: Completion timestamp (UTC), None while ACTIVE
        items: Ordered WorkSessionItem rows (by position)
        created_at: Session creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "work_sessions"

    owner_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    status: Mapped[WorkSessionStatus] = mapped_column(
        Enum(WorkSessionStatus, native_enum=False),
        nullable=False,
        default=WorkSessionStatus.ACTIVE,
    )

    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    items = relationship(
        "WorkSessionItemModel",
        back_populates="work_session",
        cascade="all, delete-orphan",
        order_by="WorkSessionItemModel.position",
    )
