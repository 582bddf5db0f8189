import os

# Must be set before userhub is imported so the in-memory engine is used
os.environ["ENV"] = "test"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient
from userhub.database import recreate_tables, drop_all_tables
from userhub.main import app


@pytest.fixture(scope="function", autouse=True)
def setup_test_db():
    recreate_tables()  # Fresh tables in in-memory SQLite
    yield
    drop_all_tables()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def test_user_data():
    return {
        "name": "Test User",
        "email": "test@example.com",
        "password": "password123",
        "password_confirmation": "password123",
    }


@pytest.fixture
def registered_user(client, test_user_data):
    response = client.post("/api/auth/register", json=test_user_data)
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
def auth_headers(registered_user):
    return {"Authorization": f"Bearer {registered_user['token']}"}


@pytest.fixture
def network_codes():
    return {
        "success": [200, 201],
        "error": [400, 401, 404, 422]
    }
