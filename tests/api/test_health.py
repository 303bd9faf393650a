import pytest
from fastapi.testclient import TestClient

from sharepoint_knowledge.api.main import create_app
from sharepoint_knowledge.observability.middleware import CORRELATION_HEADER


@pytest.fixture
def client():
    app = create_app()
    return TestClient(app)


def test_health_check(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_health_check_generates_correlation_id(client):
    response = client.get("/api/v1/health")
    assert response.headers[CORRELATION_HEADER]


def test_health_check_echoes_correlation_id(client):
    response = client.get("/api/v1/health", headers={CORRELATION_HEADER: "req-123"})
    assert response.headers[CORRELATION_HEADER] == "req-123"
