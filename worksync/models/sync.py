"""
Sync reconciliation schemas.

Dependencies: pydantic
System role: Contract between the offline client and the reconciliation endpoint
"""

import uuid

from pydantic import Field

from worksync.models.common import CamelModel

# Last millisecond of 9999-12-31, the largest instant datetime can hold
MAX_CLIENT_TIMESTAMP = 253_402_300_799_999


class SyncProgressRequest(CamelModel):
    """A client's progress snapshot for one (session, document) pair."""

    work_session_id: uuid.UUID
    document_id: str = Field(min_length=1)
    progress: dict[str, bool]
    client_timestamp: int | None = Field(
        default=None,
        ge=0,
        le=MAX_CLIENT_TIMESTAMP,
        description="Client lastUpdated in epoch milliseconds; server time when omitted",
    )


class SyncProgressResponse(CamelModel):
    """Acknowledgment of a sync request."""

    success: bool = True
