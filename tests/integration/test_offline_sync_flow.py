"""
End-to-end offline -> online scenarios.

Drives the real FastAPI application (over httpx.ASGITransport, backed by the
in-memory SQLite database) with a SessionStateManager whose connectivity is
flipped by hand.

System role: Verification of client/server reconciliation as a whole
"""

import httpx
import pytest

from worksync.boundary.db import get_async_db
from worksync.client.connectivity import ManualConnectivity
from worksync.client.progress_store import FileProgressStore
from worksync.client.state import ChecklistProgressState, epoch_ms
from worksync.client.state_manager import SessionStateManager
from worksync.client.transport import HttpSyncTransport
from worksync.main import create_app

API_ROOT = "http://test/api/v1"


class AheadOfServerClock:
    """Epoch-millisecond clock safely ahead of any server timestamp."""

    def __init__(self) -> None:
        self.now = epoch_ms() + 1_000

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def app(test_session_factory):
    app = create_app()

    async def override_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_async_db] = override_db
    return app


@pytest.fixture
async def http_client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url=API_ROOT) as client:
        yield client


@pytest.fixture
async def work_session(http_client: httpx.AsyncClient) -> dict:
    response = await http_client.post(
        "/sessions", json={"ownerId": "tech-7", "documentIds": ["docA", "docB"]}
    )
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def connectivity() -> ManualConnectivity:
    return ManualConnectivity(online=False)


@pytest.fixture
def manager(tmp_path, http_client, connectivity) -> SessionStateManager:
    return SessionStateManager(
        FileProgressStore(tmp_path / "progress"),
        HttpSyncTransport(API_ROOT, client=http_client),
        connectivity,
        clock=AheadOfServerClock(),
    )


def progress_for(work_session: dict, document_id: str, **steps: bool) -> ChecklistProgressState:
    return ChecklistProgressState(
        work_session_id=work_session["id"],
        document_id=document_id,
        progress=steps,
    )


async def fetch_items(http_client: httpx.AsyncClient, session_id: str) -> dict:
    response = await http_client.get(f"/sessions/{session_id}")
    assert response.status_code == 200
    return {item["documentId"]: item for item in response.json()["items"]}


async def test_offline_progress_reaches_server_when_back_online(
    http_client: httpx.AsyncClient,
    work_session: dict,
    manager: SessionStateManager,
    connectivity: ManualConnectivity,
) -> None:
    # Arrange: the technician works offline
    await manager.start()
    manager.save_progress(progress_for(work_session, "docA", s1=True))
    manager.save_progress(progress_for(work_session, "docA", s1=True, s2=True))
    assert manager.get_pending_sync_count() == 1

    # Act: connectivity returns
    connectivity.set_online(True)
    await manager.stop()

    # Assert
    assert manager.get_pending_sync_count() == 0
    items = await fetch_items(http_client, work_session["id"])
    assert items["docA"]["status"] == "IN_PROGRESS"
    assert items["docA"]["progress"] == {"s1": True, "s2": True}
    assert items["docB"]["status"] == "PENDING"


async def test_unknown_document_stays_pending_without_retry_storm(
    work_session: dict,
    manager: SessionStateManager,
    connectivity: ManualConnectivity,
) -> None:
    connectivity.set_online(True)
    manager.save_progress(progress_for(work_session, "not-in-session", s1=True))

    await manager.force_sync_all()
    await manager.force_sync_all()

    assert manager.get_pending_sync_count() == 1
    assert manager.load_progress(work_session["id"], "not-in-session") == {"s1": True}


async def test_stale_snapshot_is_acknowledged_without_overwriting(
    http_client: httpx.AsyncClient,
    work_session: dict,
    tmp_path,
) -> None:
    # Arrange: a record stamped well before the server's latest write
    stale_clock = lambda: epoch_ms() - 3_600_000  # noqa: E731
    manager = SessionStateManager(
        FileProgressStore(tmp_path / "stale"),
        HttpSyncTransport(API_ROOT, client=http_client),
        clock=stale_clock,
    )
    manager.save_progress(progress_for(work_session, "docA", s1=False))
    response = await http_client.patch(
        "/sessions",
        json={"sessionId": work_session["id"], "documentId": "docA", "progress": {"s1": True}},
    )
    assert response.status_code == 200

    # Act
    await manager.force_sync_all()

    # Assert
    assert manager.get_pending_sync_count() == 0
    items = await fetch_items(http_client, work_session["id"])
    assert items["docA"]["progress"] == {"s1": True}


async def test_completed_session_lifecycle_over_http(
    http_client: httpx.AsyncClient,
    work_session: dict,
) -> None:
    first = await http_client.put("/sessions", json={"sessionId": work_session["id"]})
    second = await http_client.put("/sessions", json={"sessionId": work_session["id"]})
    active = await http_client.get("/sessions/active", params={"ownerId": "tech-7"})

    assert first.status_code == 200
    assert first.json()["status"] == "COMPLETED"
    assert {item["status"] for item in first.json()["items"]} == {"COMPLETED"}
    assert second.status_code == 409
    assert second.json()["code"] == "CONFLICT"
    assert active.status_code == 404


async def test_first_sync_from_lagging_device_clock_is_applied(
    tmp_path,
    http_client: httpx.AsyncClient,
    work_session: dict,
) -> None:
    # Arrange: device clock two seconds behind the server, item never written
    lagging = SessionStateManager(
        FileProgressStore(tmp_path / "lagging"),
        HttpSyncTransport(API_ROOT, client=http_client),
        clock=lambda: epoch_ms() - 2_000,
    )
    lagging.save_progress(progress_for(work_session, "docA", s1=True))

    # Act
    await lagging.force_sync_all()

    # Assert
    assert lagging.get_pending_sync_count() == 0
    items = await fetch_items(http_client, work_session["id"])
    assert items["docA"]["status"] == "IN_PROGRESS"
    assert items["docA"]["progress"] == {"s1": True}


async def test_out_of_range_client_timestamp_is_400(
    http_client: httpx.AsyncClient, work_session: dict
) -> None:
    response = await http_client.post(
        "/sessions/sync",
        json={
            "workSessionId": work_session["id"],
            "documentId": "docA",
            "progress": {"s1": True},
            "clientTimestamp": 10**18,
        },
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "VALIDATION_ERROR"
    assert "detail" not in body
