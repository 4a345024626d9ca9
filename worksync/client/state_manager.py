"""
Session State Manager.

Single point of truth, per device, for "what has this user changed that the
server might not know about yet". It writes progress through to the Local
Progress Store without touching the network, and drains pending records to
the reconciliation endpoint when the device is online.

Pending records are derived, not queued: a stored record is pending while its
lastUpdated is newer than the last timestamp the server acknowledged for its
key. A record is only discarded after the server confirmed that exact
lastUpdated.

Failure handling:
  * Storage failures switch the manager to an in-memory store for the rest of
    the process lifetime; callers never see them.
  * Transient network failures leave the record pending for the next sweep.
  * Rejected records (NOT_FOUND / validation) stay pending but are not resent
    until a newer local write replaces them.

Dependencies: asyncio, worksync.client.progress_store, worksync.client.transport
System role: Offline sync driver
"""

import asyncio
import logging
from typing import Callable

from worksync.client.connectivity import ConnectivityMonitor, Unsubscribe
from worksync.client.progress_store import (
    FileProgressStore,
    InMemoryProgressStore,
    ProgressStore,
)
from worksync.client.state import ChecklistProgressState, RecordKey, epoch_ms
from worksync.client.transport import HttpSyncTransport, SyncOutcome, SyncTransport
from worksync.configs.sync_client import SyncClientSettings
from worksync.core.exceptions import StorageUnavailableError, TransientNetworkError
from worksync.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

PendingListener = Callable[[int], None]


class SessionStateManager:
    """
    Offline-first progress tracker and sync driver.

    Construct once per application context and pass it by reference; it owns
    no global state.

    Attributes:
        store: Durable store in use until storage fails
        transport: Delivers snapshots to the server
        connectivity: Optional online/offline signal
    """

    def __init__(
        self,
        store: ProgressStore,
        transport: SyncTransport,
        connectivity: ConnectivityMonitor | None = None,
        *,
        sync_interval: float = 0.0,
        max_concurrency: int = 4,
        clock: Callable[[], int] = epoch_ms,
    ) -> None:
        """
        Initialize the manager.

        Args:
            store: Local Progress Store
            transport: Sync transport
            connectivity: Connectivity monitor; None means always online
            sync_interval: Seconds between sweeps while online (0 disables)
            max_concurrency: Maximum pushes in flight during one sweep
            clock: Epoch-millisecond clock
        """
        self.store = store
        self.transport = transport
        self.connectivity = connectivity
        self._fallback = InMemoryProgressStore()
        self._degraded = False
        self._sync_interval = sync_interval
        self._max_concurrency = max(1, max_concurrency)
        self._clock = clock

        self._acknowledged: dict[RecordKey, int] = {}
        self._rejected: dict[RecordKey, int] = {}
        self._pending_listeners: list[PendingListener] = []

        self._sweep_task: asyncio.Task | None = None
        self._rerun_requested = False
        self._interval_task: asyncio.Task | None = None
        self._background: set[asyncio.Task] = set()
        self._unsubscribe: Unsubscribe | None = None

    @classmethod
    def from_settings(
        cls,
        settings: SyncClientSettings,
        connectivity: ConnectivityMonitor | None = None,
    ) -> "SessionStateManager":
        """
        Build a manager with a file store and HTTP transport from settings.

        Falls back to an in-memory store when the storage directory is unusable.
        """
        store: ProgressStore
        try:
            store = FileProgressStore(settings.storage_dir)
        except StorageUnavailableError as e:
            logger.warning("Durable progress storage unavailable, using memory: %s", e)
            store = InMemoryProgressStore()
        transport = HttpSyncTransport(settings.base_url, timeout=settings.request_timeout)
        return cls(
            store,
            transport,
            connectivity,
            sync_interval=settings.sync_interval_seconds,
            max_concurrency=settings.max_concurrency,
        )

    # ------------------------------------------------------------------
    # storage
    # ------------------------------------------------------------------
    @property
    def is_degraded(self) -> bool:
        """True once durable storage failed and records live in memory only."""
        return self._degraded

    @property
    def is_online(self) -> bool:
        return self.connectivity.is_online if self.connectivity is not None else True

    def _degrade(self, error: StorageUnavailableError) -> None:
        self._degraded = True
        logger.warning(
            "Local progress storage unavailable; tracking in memory for this session: %s",
            error,
        )
        try:
            for state in self.store.list_all():
                self._fallback.write(state)
        except StorageUnavailableError:
            logger.debug("Could not carry stored records into memory")

    def _store_call(self, operation: str, *args):
        if not self._degraded:
            try:
                return getattr(self.store, operation)(*args)
            except StorageUnavailableError as e:
                self._degrade(e)
        return getattr(self._fallback, operation)(*args)

    # ------------------------------------------------------------------
    # progress
    # ------------------------------------------------------------------
    def save_progress(self, state: ChecklistProgressState) -> ChecklistProgressState:
        """
        Stamp and persist a progress snapshot. Never touches the network.

        lastUpdated is the current clock, bumped past the previous stamp of
        the same key so it strictly increases even within one millisecond.

        Args:
            state: Snapshot to save (its lastUpdated is ignored)

        Returns:
            ChecklistProgressState: The stamped record as stored
        """
        key = state.key
        previous = self._store_call("read", *key)
        floor = max(
            previous.last_updated + 1 if previous is not None else 0,
            self._acknowledged.get(key, -1) + 1,
        )
        stamped = state.model_copy(
            update={"last_updated": max(self._clock(), floor)},
            deep=True,
        )
        self._store_call("write", stamped)
        # The new stamp is past any acknowledged or rejected one for this key.
        self._acknowledged.pop(key, None)
        self._rejected.pop(key, None)
        logger.debug("Progress saved locally for session %s", stamped.work_session_id)
        self._notify_pending()
        return stamped

    def load_progress(
        self,
        work_session_id: str,
        document_id: str | None = None,
    ) -> dict[str, bool] | None:
        """
        Return the locally held progress map, if any.

        The local record always holds the user's most recent unacknowledged
        intent, so callers hydrate from it before asking the server.
        """
        state = self._store_call("read", work_session_id, document_id)
        return dict(state.progress) if state is not None else None

    def _pending_records(self) -> list[ChecklistProgressState]:
        return [
            state
            for state in self._store_call("list_all")
            if state.last_updated > self._acknowledged.get(state.key, -1)
        ]

    def get_pending_sync_count(self) -> int:
        """Number of stored records whose lastUpdated the server has not acknowledged."""
        return len(self._pending_records())

    def on_pending_change(self, listener: PendingListener) -> Unsubscribe:
        """Register a listener called with the pending count after saves and sweeps."""
        self._pending_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._pending_listeners:
                self._pending_listeners.remove(listener)

        return unsubscribe

    def _notify_pending(self) -> None:
        if not self._pending_listeners:
            return
        count = self.get_pending_sync_count()
        for listener in list(self._pending_listeners):
            try:
                listener(count)
            except Exception:
                logger.exception("Pending count listener failed")

    # ------------------------------------------------------------------
    # sync
    # ------------------------------------------------------------------
    async def force_sync_all(self) -> None:
        """
        Push every pending record once; never raises for sync failures.

        Only one sweep runs at a time. A call arriving while a sweep is in
        flight waits for it and schedules a single follow-up sweep, however
        many calls arrive.
        """
        if self._sweep_task is not None and not self._sweep_task.done():
            self._rerun_requested = True
            await asyncio.shield(self._sweep_task)
            return

        self._sweep_task = asyncio.get_running_loop().create_task(self._run_sweeps())
        await asyncio.shield(self._sweep_task)

    def request_sync(self) -> None:
        """Schedule force_sync_all without waiting for it."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("Sync requested outside an event loop; ignored")
            return
        task = loop.create_task(self.force_sync_all())
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _run_sweeps(self) -> None:
        while True:
            self._rerun_requested = False
            await self._sweep()
            if not self._rerun_requested:
                break

    async def _sweep(self) -> None:
        candidates = [
            state
            for state in self._pending_records()
            if self._rejected.get(state.key) != state.last_updated
        ]
        if not candidates:
            return

        logger.info("Syncing %d pending progress record(s)", len(candidates))
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def bounded(state: ChecklistProgressState) -> bool:
            async with semaphore:
                return await self._push_one(state)

        results = await asyncio.gather(*(bounded(state) for state in candidates))
        synced = sum(1 for ok in results if ok)
        log_with_context(
            logger,
            logging.INFO,
            f"Sync sweep finished: {synced}/{len(candidates)} acknowledged",
            synced=synced,
            attempted=len(candidates),
        )
        self._notify_pending()

    async def _push_one(self, state: ChecklistProgressState) -> bool:
        try:
            outcome = await self.transport.push(state)
        except TransientNetworkError as e:
            log_with_context(
                logger,
                logging.WARNING,
                f"Sync deferred for session {state.work_session_id}: {e.message}",
                session_id=state.work_session_id,
                document_id=state.document_id,
            )
            return False
        except Exception as e:
            log_exception_with_context(
                logger,
                "Unexpected sync failure; record stays pending",
                e,
                session_id=state.work_session_id,
                document_id=state.document_id,
            )
            return False

        if outcome is SyncOutcome.REJECTED:
            self._rejected[state.key] = state.last_updated
            return False

        self._acknowledge(state)
        return True

    def _acknowledge(self, state: ChecklistProgressState) -> None:
        key = state.key
        self._acknowledged[key] = max(self._acknowledged.get(key, -1), state.last_updated)
        self._rejected.pop(key, None)
        current = self._store_call("read", *key)
        # A newer save during the request keeps its record pending.
        if current is not None and current.last_updated <= state.last_updated:
            self._store_call("delete", *key)
            current = None
        # Once the clock is past the stamp, later saves are newer without it.
        if current is None and self._clock() > self._acknowledged[key]:
            del self._acknowledged[key]
        logger.debug("Server acknowledged session %s at %d", state.work_session_id, state.last_updated)

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    def follows(self, connectivity: ConnectivityMonitor) -> bool:
        """True while started and reacting to this monitor's transitions itself."""
        return self._unsubscribe is not None and self.connectivity is connectivity

    def _on_connectivity_change(self, online: bool) -> None:
        if online:
            self.request_sync()

    async def _interval_loop(self) -> None:
        while True:
            await asyncio.sleep(self._sync_interval)
            if self.is_online:
                await self.force_sync_all()

    async def start(self) -> None:
        """
        Begin automatic syncing.

        Subscribes to connectivity (offline -> online triggers a sweep),
        starts the interval sweep and flushes records left pending by a
        previous run when already online.
        """
        if self.connectivity is not None and self._unsubscribe is None:
            self._unsubscribe = self.connectivity.on_connectivity_change(
                self._on_connectivity_change
            )
        if self._sync_interval > 0 and self._interval_task is None:
            self._interval_task = asyncio.get_running_loop().create_task(self._interval_loop())

        pending = self.get_pending_sync_count()
        if pending:
            logger.info("Recovered %d pending progress record(s) from local storage", pending)
            if self.is_online:
                self.request_sync()

    async def stop(self) -> None:
        """Stop automatic syncing, let an in-flight sweep finish and close the transport."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._interval_task is not None:
            self._interval_task.cancel()
            try:
                await self._interval_task
            except asyncio.CancelledError:
                pass
            self._interval_task = None
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)
        if self._sweep_task is not None and not self._sweep_task.done():
            await self._sweep_task
        await self.transport.aclose()
