"""
Sync transport.

Pushes one ChecklistProgressState to the reconciliation endpoint and turns
the response into an outcome the Session State Manager can act on:

    2xx                -> ACCEPTED  (record may be cleared)
    404 / 400 / 422    -> REJECTED  (non-retryable for this lastUpdated)
    anything else      -> TransientNetworkError (record stays pending)

Connection errors and timeouts are also transient. The request timeout is
the only way a push ends early.

Dependencies: httpx, worksync.client.state
System role: Network edge of the offline client
"""

from abc import ABC, abstractmethod
import enum
import logging

import httpx

from worksync.client.state import ChecklistProgressState
from worksync.core.exceptions import ErrorCode, TransientNetworkError

logger = logging.getLogger(__name__)

SYNC_PATH = "/sessions/sync"

_REJECTING_STATUSES = {
    httpx.codes.BAD_REQUEST: ErrorCode.VALIDATION_ERROR,
    httpx.codes.NOT_FOUND: ErrorCode.NOT_FOUND,
    httpx.codes.UNPROCESSABLE_ENTITY: ErrorCode.VALIDATION_ERROR,
}


class SyncOutcome(str, enum.Enum):
    """Result of pushing one record."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"


class SyncTransport(ABC):
    """Delivers progress snapshots to the server of record."""

    @abstractmethod
    async def push(self, state: ChecklistProgressState) -> SyncOutcome:
        """
        Send one snapshot.

        Raises:
            TransientNetworkError: If the push may succeed on a later attempt
        """

    async def aclose(self) -> None:
        """Release network resources."""


class HttpSyncTransport(SyncTransport):
    """httpx-based transport posting to POST {base_url}/sessions/sync."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            base_url: API root, e.g. http://localhost:8082/api/v1
            timeout: Per-request timeout in seconds
            client: Optional pre-built client (tests inject MockTransport here)
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=httpx.Timeout(timeout),
        )

    async def push(self, state: ChecklistProgressState) -> SyncOutcome:
        payload = {
            "workSessionId": state.work_session_id,
            "documentId": state.document_id,
            "progress": state.progress,
            "clientTimestamp": state.last_updated,
        }
        try:
            response = await self._client.post(SYNC_PATH, json=payload)
        except httpx.TimeoutException as e:
            raise TransientNetworkError(f"Sync request timed out: {type(e).__name__}") from e
        except httpx.HTTPError as e:
            raise TransientNetworkError(f"Sync request failed: {type(e).__name__}: {e}") from e

        if response.is_success:
            return SyncOutcome.ACCEPTED

        code = _REJECTING_STATUSES.get(response.status_code)
        if code is not None:
            logger.warning(
                "Server rejected progress for session %s document %s: %s",
                state.work_session_id,
                state.document_id,
                code.value,
                extra={"status_code": response.status_code},
            )
            return SyncOutcome.REJECTED

        raise TransientNetworkError(
            f"Sync request returned HTTP {response.status_code}",
            status_code=response.status_code,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
