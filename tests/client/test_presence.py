"""
Test suite for OfflinePresence.

System role: Verification of the UI-facing presence hook
"""

import pytest

from fakes import FakeClock, FakeSyncTransport, make_state
from worksync.client.connectivity import ManualConnectivity
from worksync.client.presence import OfflinePresence, PresenceView
from worksync.client.progress_store import InMemoryProgressStore
from worksync.client.state_manager import SessionStateManager
from worksync.core.exceptions import TransientNetworkError


@pytest.fixture
def connectivity() -> ManualConnectivity:
    return ManualConnectivity(online=False)


@pytest.fixture
def manager(connectivity, fake_transport: FakeSyncTransport, clock: FakeClock) -> SessionStateManager:
    return SessionStateManager(InMemoryProgressStore(), fake_transport, connectivity, clock=clock)


@pytest.fixture
def presence(manager, connectivity) -> OfflinePresence:
    return OfflinePresence(manager, connectivity).attach()


def test_initial_view_offline(presence: OfflinePresence) -> None:
    assert presence.view == PresenceView(is_online=False, pending_sync_count=0, banner_visible=True)


def test_view_tracks_pending_count(presence: OfflinePresence, manager: SessionStateManager) -> None:
    views = []
    presence.subscribe(views.append)

    manager.save_progress(make_state(document="docA"))
    manager.save_progress(make_state(document="docB"))

    assert [view.pending_sync_count for view in views] == [1, 2]
    assert presence.view.pending_sync_count == 2


def test_dismissed_banner_returns_after_reconnect_cycle(
    presence: OfflinePresence, connectivity: ManualConnectivity
) -> None:
    presence.dismiss_banner()
    assert presence.view.banner_visible is False

    connectivity.set_online(True)
    assert presence.view.banner_visible is False

    connectivity.set_online(False)
    assert presence.view.banner_visible is True


async def test_coming_online_flushes_pending(
    presence: OfflinePresence,
    manager: SessionStateManager,
    connectivity: ManualConnectivity,
    fake_transport: FakeSyncTransport,
) -> None:
    views = []
    presence.subscribe(views.append)
    manager.save_progress(make_state())

    connectivity.set_online(True)
    await manager.stop()

    assert len(fake_transport.pushed) == 1
    assert views[-1] == PresenceView(is_online=True, pending_sync_count=0, banner_visible=False)


async def test_started_manager_syncs_once_when_coming_online(
    presence: OfflinePresence,
    manager: SessionStateManager,
    connectivity: ManualConnectivity,
    fake_transport: FakeSyncTransport,
) -> None:
    # A failing push keeps the record pending, so a second trigger would resend it
    fake_transport.outcome = TransientNetworkError("connection reset")
    await manager.start()
    assert manager.follows(connectivity) is True
    manager.save_progress(make_state())

    connectivity.set_online(True)
    await manager.stop()

    assert len(fake_transport.pushed) == 1
    assert presence.view.pending_sync_count == 1
    assert manager.follows(connectivity) is False


def test_going_offline_keeps_pending(
    manager: SessionStateManager,
    fake_transport: FakeSyncTransport,
    clock: FakeClock,
) -> None:
    connectivity = ManualConnectivity(online=True)
    presence = OfflinePresence(manager, connectivity).attach()
    manager.save_progress(make_state())

    connectivity.set_online(False)

    assert fake_transport.pushed == []
    assert presence.view.pending_sync_count == 1
    assert presence.view.is_online is False


def test_detach_stops_updates(presence: OfflinePresence, manager: SessionStateManager) -> None:
    views = []
    presence.subscribe(views.append)

    presence.detach()
    manager.save_progress(make_state())

    assert views == []
