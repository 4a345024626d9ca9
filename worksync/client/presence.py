"""
Offline Presence hook.

Adapts a ConnectivityMonitor and a SessionStateManager into the
{is_online, pending_sync_count} view display components render, e.g. a
dismissible offline banner. Holds no sync logic: on an online transition it
asks the manager to flush (unless a started manager already follows the same
monitor), on an offline transition it only updates the view.

Banner dismissal lasts until the device is back online.

Dependencies: worksync.client.connectivity, worksync.client.state_manager
System role: UI-facing adapter of the offline client
"""

from dataclasses import dataclass
import logging
from typing import Callable

from worksync.client.connectivity import ConnectivityMonitor, Unsubscribe
from worksync.client.state_manager import SessionStateManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PresenceView:
    """Snapshot rendered by display components."""

    is_online: bool
    pending_sync_count: int
    banner_visible: bool


PresenceListener = Callable[[PresenceView], None]


class OfflinePresence:
    """Observable presence view over connectivity and pending sync count."""

    def __init__(self, manager: SessionStateManager, connectivity: ConnectivityMonitor) -> None:
        self._manager = manager
        self._connectivity = connectivity
        self._dismissed = False
        self._listeners: list[PresenceListener] = []
        self._unsubscribers: list[Unsubscribe] = []

    def attach(self) -> "OfflinePresence":
        """Subscribe to both sources. Idempotent."""
        if not self._unsubscribers:
            self._unsubscribers = [
                self._connectivity.on_connectivity_change(self._on_connectivity_change),
                self._manager.on_pending_change(lambda count: self._emit(count)),
            ]
        return self

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def _build_view(self, pending: int | None = None) -> PresenceView:
        is_online = self._connectivity.is_online
        return PresenceView(
            is_online=is_online,
            pending_sync_count=(
                pending if pending is not None else self._manager.get_pending_sync_count()
            ),
            banner_visible=not is_online and not self._dismissed,
        )

    @property
    def view(self) -> PresenceView:
        return self._build_view()

    def subscribe(self, listener: PresenceListener) -> Unsubscribe:
        """Register a listener called with every new view."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dismiss_banner(self) -> None:
        """Hide the offline banner until connectivity comes back."""
        self._dismissed = True
        self._emit()

    def _on_connectivity_change(self, online: bool) -> None:
        if online:
            self._dismissed = False
            if not self._manager.follows(self._connectivity):
                self._manager.request_sync()
        self._emit()

    def _emit(self, pending: int | None = None) -> None:
        view = self._build_view(pending)
        for listener in list(self._listeners):
            try:
                listener(view)
            except Exception:
                logger.exception("Presence listener failed")
