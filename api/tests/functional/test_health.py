from fastapi.testclient import TestClient

from userhub.main import app
from userhub.services import users as user_service


def test_health_check(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["service"] == "Userhub API"
    assert body["version"] == "1.0.0"
    assert "timestamp" in body


def test_legacy_user_endpoint_is_gone(client):
    response = client.get("/api/user")

    assert response.status_code == 410
    assert response.json() == {
        "success": False,
        "message": "This endpoint is deprecated. Use /auth/me with Bearer token instead.",
        "code": "DEPRECATED_ENDPOINT",
    }


def test_unexpected_error_hides_details(auth_headers, monkeypatch):
    def broken_stats(db):
        raise RuntimeError("connection string with secrets")

    monkeypatch.setattr(user_service, "user_stats", broken_stats)
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/api/users/stats", headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Internal server error"}
