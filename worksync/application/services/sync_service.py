"""
Sync reconciliation service.

Merges a client's checklist snapshot for one (session, document) pair into
the server record using last-write-wins on updated_at. Writes older than the
last stored progress are acknowledged without being applied: the server already
holds something at least as recent, and acknowledging keeps client retries
idempotent.

Dependencies: worksync.boundary.db.CRUD
System role: Offline client reconciliation use case
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from worksync.boundary.db.base import utcnow
from worksync.boundary.db.CRUD import work_session_item_crud
from worksync.core.exceptions import SessionItemNotFoundError, ValidationError
from worksync.observability.log_utils import log_with_context, summarize_checklist

logger = logging.getLogger(__name__)


def timestamp_from_epoch_ms(epoch_ms: int) -> datetime:
    """
    Convert a client epoch-millisecond timestamp to an aware UTC datetime.

    Raises:
        ValidationError: If the timestamp is outside the representable range
    """
    try:
        return datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as e:
        raise ValidationError(
            f"clientTimestamp out of range: {epoch_ms}",
            field="client_timestamp",
        ) from e


class SyncReconciliationService:
    """Last-write-wins reconciliation of client progress snapshots."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def reconcile(
        self,
        work_session_id: UUID,
        document_id: str,
        progress: dict[str, bool],
        client_timestamp: int | None = None,
    ) -> bool:
        """
        Apply a client snapshot unless newer progress is already stored.

        Args:
            work_session_id: Session UUID
            document_id: Document identifier
            progress: Client checklist map
            client_timestamp: Client lastUpdated (epoch ms); server time if None

        Returns:
            bool: True if the snapshot was written, False if it was stale

        Raises:
            ValidationError: If client_timestamp is out of range
            SessionItemNotFoundError: If no item exists for the pair
        """
        version = (
            timestamp_from_epoch_ms(client_timestamp)
            if client_timestamp is not None
            else utcnow()
        )

        try:
            applied = await work_session_item_crud.write_progress(
                self.db,
                work_session_id,
                document_id,
                progress,
                version,
                only_if_not_older=True,
            )
            if not applied:
                item = await work_session_item_crud.get_by_pair(
                    self.db, work_session_id, document_id
                )
                if item is None:
                    raise SessionItemNotFoundError(str(work_session_id), document_id)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        log_with_context(
            logger,
            logging.INFO if applied else logging.WARNING,
            "Progress synced" if applied else "Stale progress snapshot ignored",
            session_id=work_session_id,
            document_id=document_id,
            client_timestamp=client_timestamp,
            steps=summarize_checklist(progress),
        )
        return applied
