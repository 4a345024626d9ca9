"""
Work session domain schemas.

Request/response schemas for the session lifecycle endpoints.

Dependencies: pydantic
System role: Work session API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field

from worksync.boundary.db.models import WorkSessionItemStatus, WorkSessionStatus
from worksync.models.common import CamelModel


class CreateWorkSessionRequest(CamelModel):
    """Request schema for creating a new work session."""

    owner_id: str = Field(min_length=1, description="Acting user identity")
    document_ids: list[str] = Field(description="Documents to work through, in order")
    title: str | None = Field(default=None, max_length=255, description="Optional session title")


class UpdateItemProgressRequest(CamelModel):
    """Request schema for writing progress on one document of a session."""

    session_id: uuid.UUID
    document_id: str = Field(min_length=1)
    progress: dict[str, bool] = Field(description="Checklist map stepKey -> completed")
    status: WorkSessionItemStatus | None = Field(
        default=None,
        description="Optional explicit status; only IN_PROGRESS or COMPLETED",
    )


class CompleteWorkSessionRequest(CamelModel):
    """Request schema for completing a work session."""

    session_id: uuid.UUID


class WorkSessionItemResponse(CamelModel):
    """Response schema for a single work session item."""

    id: uuid.UUID
    work_session_id: uuid.UUID
    document_id: str
    position: int
    progress: dict[str, bool]
    status: WorkSessionItemStatus
    started_at: datetime | None = None
    completed_at: datetime | None = None
    updated_at: datetime


class WorkSessionResponse(CamelModel):
    """Response schema for work session operations."""

    id: uuid.UUID
    owner_id: str
    title: str
    status: WorkSessionStatus
    created_at: datetime
    updated_at: datetime
    completed_at: datetime | None = None
    items: list[WorkSessionItemResponse] = Field(default_factory=list)
