"""
Sync reconciliation API endpoint.

Routes:
- POST /sessions/sync - Merge a client's progress snapshot (last-write-wins)

Dependencies: worksync.application.services, worksync.models
System role: Offline client reconciliation HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from worksync.api.deps import get_sync_service
from worksync.api.errors import http_error_from
from worksync.application.services import SyncReconciliationService
from worksync.core.exceptions import WorkSyncException
from worksync.models.sync import SyncProgressRequest, SyncProgressResponse
from worksync.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sync"])


@router.post("/sync", response_model=SyncProgressResponse)
async def sync_progress(
    request: SyncProgressRequest,
    sync_service: SyncReconciliationService = Depends(get_sync_service),
) -> SyncProgressResponse:
    """
    Reconcile one (session, document) progress snapshot.

    Stale snapshots are acknowledged without being applied, so the response
    only says whether the server accepted the request.

    Raises:
        HTTPException(400): Missing fields
        HTTPException(404): Item not found (client must not retry blindly)
        HTTPException(500): Unexpected failure
    """
    try:
        await sync_service.reconcile(
            work_session_id=request.work_session_id,
            document_id=request.document_id,
            progress=request.progress,
            client_timestamp=request.client_timestamp,
        )
        return SyncProgressResponse(success=True)
    except WorkSyncException as e:
        raise http_error_from(e)
    except Exception as e:
        log_exception_with_context(
            logger,
            "Failed to sync progress",
            e,
            session_id=request.work_session_id,
            document_id=request.document_id,
        )
        raise HTTPException(status_code=500, detail="Internal Server Error")
