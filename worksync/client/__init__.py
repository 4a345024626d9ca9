"""
Offline sync client.

Exports:
  - ChecklistProgressState: Device-local progress record
  - ProgressStore, FileProgressStore, InMemoryProgressStore: Local Progress Store
  - SyncTransport, HttpSyncTransport, SyncOutcome: Delivery to the server
  - ConnectivityMonitor, ManualConnectivity, HealthProbeConnectivity: Presence signal
  - SessionStateManager: Pending tracking and sync driver
  - OfflinePresence, PresenceView: UI-facing presence hook

Usage:
    connectivity = HealthProbeConnectivity(settings.base_url)
    manager = SessionStateManager.from_settings(settings, connectivity)
    presence = OfflinePresence(manager, connectivity).attach()
    connectivity.start()
    await manager.start()

    manager.save_progress(ChecklistProgressState(
        work_session_id=session_id, document_id=doc_id, progress={"step_1": True},
    ))
"""

from worksync.client.connectivity import (
    ConnectivityMonitor,
    HealthProbeConnectivity,
    ManualConnectivity,
)
from worksync.client.presence import OfflinePresence, PresenceView
from worksync.client.progress_store import (
    FileProgressStore,
    InMemoryProgressStore,
    ProgressStore,
)
from worksync.client.state import ChecklistProgressState
from worksync.client.state_manager import SessionStateManager
from worksync.client.transport import HttpSyncTransport, SyncOutcome, SyncTransport

__all__ = [
    "ChecklistProgressState",
    "ConnectivityMonitor",
    "FileProgressStore",
    "HealthProbeConnectivity",
    "HttpSyncTransport",
    "InMemoryProgressStore",
    "ManualConnectivity",
    "OfflinePresence",
    "PresenceView",
    "ProgressStore",
    "SessionStateManager",
    "SyncOutcome",
    "SyncTransport",
]
