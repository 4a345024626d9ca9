"""
Application services.

Exports:
  - SessionLifecycleService: WorkSession / WorkSessionItem state machine
  - SyncReconciliationService: last-write-wins merge of client snapshots
"""

from worksync.application.services.session_service import SessionLifecycleService
from worksync.application.services.sync_service import SyncReconciliationService

__all__ = ["SessionLifecycleService", "SyncReconciliationService"]
