"""
Test suite for HttpSyncTransport.

Uses httpx.MockTransport to script server answers.

System role: Verification of the client network edge
"""

import json

import httpx
import pytest

from worksync.client.state import ChecklistProgressState
from worksync.client.transport import HttpSyncTransport, SyncOutcome
from worksync.core.exceptions import TransientNetworkError

BASE_URL = "http://server/api/v1"


def make_state() -> ChecklistProgressState:
    return ChecklistProgressState(
        work_session_id="6f1c1f1e-8d8e-4d55-9b8f-2f4a0c1d9e11",
        document_id="docA",
        progress={"s1": True},
        last_updated=1_700_000_000_000,
    )


def make_transport(handler) -> HttpSyncTransport:
    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return HttpSyncTransport(BASE_URL, client=client)


async def test_push_posts_snapshot_and_accepts_2xx() -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"success": True})

    transport = make_transport(handler)

    outcome = await transport.push(make_state())

    assert outcome is SyncOutcome.ACCEPTED
    (request,) = seen
    assert request.method == "POST"
    assert request.url.path == "/api/v1/sessions/sync"
    assert json.loads(request.content) == {
        "workSessionId": "6f1c1f1e-8d8e-4d55-9b8f-2f4a0c1d9e11",
        "documentId": "docA",
        "progress": {"s1": True},
        "clientTimestamp": 1_700_000_000_000,
    }


@pytest.mark.parametrize("status_code", [400, 404, 422])
async def test_push_rejected_statuses(status_code: int) -> None:
    transport = make_transport(lambda request: httpx.Response(status_code, json={}))

    assert await transport.push(make_state()) is SyncOutcome.REJECTED


@pytest.mark.parametrize("status_code", [500, 502, 503, 409])
async def test_push_other_statuses_are_transient(status_code: int) -> None:
    transport = make_transport(lambda request: httpx.Response(status_code))

    with pytest.raises(TransientNetworkError) as exc_info:
        await transport.push(make_state())

    assert exc_info.value.details["status_code"] == status_code


async def test_push_connection_error_is_transient() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = make_transport(handler)

    with pytest.raises(TransientNetworkError):
        await transport.push(make_state())


async def test_push_timeout_is_transient() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    transport = make_transport(handler)

    with pytest.raises(TransientNetworkError, match="timed out"):
        await transport.push(make_state())


async def test_aclose_leaves_injected_client_open() -> None:
    client = httpx.AsyncClient(
        base_url=BASE_URL, transport=httpx.MockTransport(lambda r: httpx.Response(200))
    )
    transport = HttpSyncTransport(BASE_URL, client=client)

    await transport.aclose()

    assert client.is_closed is False
    await client.aclose()
