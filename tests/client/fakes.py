"""
Test doubles for the offline sync client.

Provides: Scriptable sync transport, controllable clock, state builder
System role: Client test infrastructure
"""

import asyncio

from worksync.client.state import ChecklistProgressState
from worksync.client.transport import SyncOutcome, SyncTransport


class FakeSyncTransport(SyncTransport):
    """
    In-process transport recording every push.

    Attributes:
        outcome: SyncOutcome to return, or an exception instance to raise
        pushed: Snapshots received, in order
        gate: When set to an unset Event, pushes wait on it
        started: Set as soon as a push begins
    """

    def __init__(self, outcome=SyncOutcome.ACCEPTED) -> None:
        self.outcome = outcome
        self.pushed: list[ChecklistProgressState] = []
        self.gate: asyncio.Event | None = None
        self.started = asyncio.Event()
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def push(self, state: ChecklistProgressState) -> SyncOutcome:
        self.pushed.append(state)
        self.started.set()
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.gate is not None:
                await self.gate.wait()
            else:
                await asyncio.sleep(0)
        finally:
            self.in_flight -= 1
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome

    async def aclose(self) -> None:
        self.closed = True


class FakeClock:
    """Epoch-millisecond clock advanced by hand."""

    def __init__(self, now: int = 1_700_000_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


def make_state(session: str = "ws-1", document: str = "docA", **progress: bool) -> ChecklistProgressState:
    return ChecklistProgressState(
        work_session_id=session,
        document_id=document,
        progress=progress or {"s1": True},
    )
