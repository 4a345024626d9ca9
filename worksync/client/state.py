"""
Client-local checklist progress record.

A ChecklistProgressState mirrors one WorkSessionItem's progress on this device
plus the lastUpdated stamp the server must acknowledge before the record may
be discarded. It is a cache of intent, never an authoritative record.

Dependencies: pydantic
System role: Device-local record shape shared by the store and sync driver
"""

import time

from pydantic import Field

from worksync.models.common import CamelModel

RecordKey = tuple[str, str]


def epoch_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


class ChecklistProgressState(CamelModel):
    """
    Progress snapshot for one (work session, document) pair.

    Persisted as {workSessionId, documentId, progress, lastUpdated}.
    """

    work_session_id: str = Field(min_length=1)
    document_id: str = Field(min_length=1)
    progress: dict[str, bool] = Field(default_factory=dict)
    last_updated: int = Field(default=0, ge=0, description="Epoch milliseconds")

    @property
    def key(self) -> RecordKey:
        """Identity of the record in the local store."""
        return (self.work_session_id, self.document_id)

    def to_record(self) -> dict:
        """Serialize to the persisted camelCase shape."""
        return self.model_dump(by_alias=True)
