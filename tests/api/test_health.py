import httpx
import pytest
from fastapi.testclient import TestClient

from worksync.boundary.db import get_async_db
from worksync.main import create_app


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    return TestClient(app)


def test_health_check(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_health_check_echoes_correlation_id(client):
    response = client.get("/api/v1/health", headers={"X-Correlation-ID": "abc-123"})
    assert response.headers["X-Correlation-ID"] == "abc-123"


async def test_health_check_db(app, test_session_factory):
    async def override_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_async_db] = override_db

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/health/db")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Database connection OK"}


def test_health_check_db_unavailable(app, client):
    class BrokenSession:
        async def execute(self, *args, **kwargs):
            raise ConnectionRefusedError("no database")

    async def override_db():
        yield BrokenSession()

    app.dependency_overrides[get_async_db] = override_db

    response = client.get("/api/v1/health/db")
    assert response.status_code == 503
