"""
Fixtures for the offline sync client tests.

System role: Client test infrastructure
"""

import pytest

from fakes import FakeClock, FakeSyncTransport


@pytest.fixture
def fake_transport() -> FakeSyncTransport:
    return FakeSyncTransport()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
