"""
Work session API endpoints.

Routes:
- POST /sessions - Create work session with its items
- PATCH /sessions - Write progress for one (session, document) item
- PUT /sessions - Complete a work session
- GET /sessions/active - Most recent active session of an owner
- GET /sessions/{session_id} - Session with items

Dependencies: worksync.application.services, worksync.models
System role: Work session lifecycle HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from worksync.api.deps import get_session_lifecycle_service
from worksync.api.errors import http_error_from
from worksync.application.services import SessionLifecycleService
from worksync.core.exceptions import WorkSyncException
from worksync.models.work_session import (
    CompleteWorkSessionRequest,
    CreateWorkSessionRequest,
    UpdateItemProgressRequest,
    WorkSessionItemResponse,
    WorkSessionResponse,
)
from worksync.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=WorkSessionResponse)
async def create_session(
    request: CreateWorkSessionRequest,
    session_service: SessionLifecycleService = Depends(get_session_lifecycle_service),
) -> WorkSessionResponse:
    """
    Create a work session with one PENDING item per document.

    Raises:
        HTTPException(400): Empty or invalid payload
        HTTPException(500): Creation failed
    """
    try:
        session_data = await session_service.create_session(
            owner_id=request.owner_id,
            document_ids=request.document_ids,
            title=request.title,
        )
        return WorkSessionResponse(**session_data)
    except WorkSyncException as e:
        raise http_error_from(e)
    except Exception as e:
        log_exception_with_context(logger, "Work session creation failed", e, owner_id=request.owner_id)
        raise HTTPException(
            status_code=500,
            detail=f"Work session creation failed: {str(e)}",
        )


@router.patch("", response_model=WorkSessionItemResponse)
async def update_item_progress(
    request: UpdateItemProgressRequest,
    session_service: SessionLifecycleService = Depends(get_session_lifecycle_service),
) -> WorkSessionItemResponse:
    """
    Write checklist progress for one document of a session.

    Raises:
        HTTPException(400): Missing fields or invalid status
        HTTPException(404): Item not found
        HTTPException(500): Update failed
    """
    try:
        item_data = await session_service.update_item_progress(
            session_id=request.session_id,
            document_id=request.document_id,
            progress=request.progress,
            status=request.status,
        )
        return WorkSessionItemResponse(**item_data)
    except WorkSyncException as e:
        raise http_error_from(e)
    except Exception as e:
        log_exception_with_context(
            logger,
            "Item progress update failed",
            e,
            session_id=request.session_id,
            document_id=request.document_id,
        )
        raise HTTPException(
            status_code=500,
            detail=f"Item progress update failed: {str(e)}",
        )


@router.put("", response_model=WorkSessionResponse)
async def complete_session(
    request: CompleteWorkSessionRequest,
    session_service: SessionLifecycleService = Depends(get_session_lifecycle_service),
) -> WorkSessionResponse:
    """
    Complete a work session.

    Raises:
        HTTPException(400): Missing sessionId
        HTTPException(404): Session not found
        HTTPException(409): Session already completed
        HTTPException(500): Completion failed
    """
    try:
        session_data = await session_service.complete_session(request.session_id)
        return WorkSessionResponse(**session_data)
    except WorkSyncException as e:
        raise http_error_from(e)
    except Exception as e:
        log_exception_with_context(logger, "Work session completion failed", e, session_id=request.session_id)
        raise HTTPException(
            status_code=500,
            detail=f"Work session completion failed: {str(e)}",
        )


@router.get("/active", response_model=WorkSessionResponse)
async def get_active_session(
    owner_id: str = Query(alias="ownerId", min_length=1),
    session_service: SessionLifecycleService = Depends(get_session_lifecycle_service),
) -> WorkSessionResponse:
    """
    Get the owner's most recent active session.

    Raises:
        HTTPException(404): Owner has no active session
    """
    try:
        session_data = await session_service.get_active_session(owner_id)
        return WorkSessionResponse(**session_data)
    except WorkSyncException as e:
        raise http_error_from(e)


@router.get("/{session_id}", response_model=WorkSessionResponse)
async def get_session(
    session_id: UUID,
    session_service: SessionLifecycleService = Depends(get_session_lifecycle_service),
) -> WorkSessionResponse:
    """
    Get a work session with its items.

    Raises:
        HTTPException(404): Session not found
    """
    try:
        session_data = await session_service.get_session(session_id)
        return WorkSessionResponse(**session_data)
    except WorkSyncException as e:
        raise http_error_from(e)
