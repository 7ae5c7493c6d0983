import pytest
from fastapi.testclient import TestClient

from notekeeper.main import create_app

PASSWORD = "StrongPassw0rd!"


@pytest.fixture()
def client(tmp_path, monkeypatch):
    # isolate data dir per test
    monkeypatch.setenv("APP_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("APP_STORE", "file")
    monkeypatch.setenv("JWT_SECRET", "dev-secret-for-tests")
    monkeypatch.setenv("JWT_EXP_MINUTES", "15")
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    return TestClient(create_app())


@pytest.fixture()
def login(client):
    """Register (if needed) and log a user in; returns Authorization headers."""

    def _login(user_id: str, role: str = "user") -> dict:
        client.post("/api/v1/auth/register", json={"user_id": user_id, "password": PASSWORD, "role": role})
        r = client.post("/api/v1/auth/login", json={"user_id": user_id, "password": PASSWORD})
        assert r.status_code == 200
        return {"Authorization": f"Bearer {r.json()['access_token']}"}

    return _login
