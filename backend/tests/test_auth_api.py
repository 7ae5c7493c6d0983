from jose import jwt

PASSWORD = "StrongPassw0rd!"


def test_register_login_token_returned(client):
    r = client.post("/api/v1/auth/register", json={"user_id": "userA", "password": PASSWORD})
    assert r.status_code == 201
    assert r.json() == {"user_id": "userA", "role": "user"}

    r = client.post("/api/v1/auth/login", json={"user_id": "userA", "password": PASSWORD})
    assert r.status_code == 200
    data = r.json()
    assert "access_token" in data
    assert data["token_type"] == "bearer"


def test_register_twice_conflicts(client):
    r = client.post("/api/v1/auth/register", json={"user_id": "userA", "password": PASSWORD})
    assert r.status_code == 201
    r = client.post("/api/v1/auth/register", json={"user_id": "userA", "password": "AnotherPassw0rd"})
    assert r.status_code == 409
    assert r.json()["code"] == "RES_CONFLICT"


def test_token_carries_role_claim(client):
    client.post("/api/v1/auth/register", json={"user_id": "alice", "password": PASSWORD, "role": "admin"})
    r = client.post("/api/v1/auth/login", json={"user_id": "alice", "password": PASSWORD})
    claims = jwt.decode(r.json()["access_token"], "dev-secret-for-tests", algorithms=["HS256"])
    assert claims["sub"] == "alice"
    assert claims["admin"] == "alice"
    assert "iat" in claims


def test_login_failures_look_identical(client):
    client.post("/api/v1/auth/register", json={"user_id": "userA", "password": PASSWORD})

    wrong_secret = client.post("/api/v1/auth/login", json={"user_id": "userA", "password": "wrongwrongwrong"})
    unknown_user = client.post("/api/v1/auth/login", json={"user_id": "ghost", "password": PASSWORD})

    assert wrong_secret.status_code == unknown_user.status_code == 401
    assert wrong_secret.json() == unknown_user.json()
    assert wrong_secret.headers["www-authenticate"] == "Bearer"


def test_register_validation(client):
    r = client.post("/api/v1/auth/register", json={"user_id": "../x", "password": PASSWORD})
    assert r.status_code == 422
    r = client.post("/api/v1/auth/register", json={"user_id": "userA", "password": "short"})
    assert r.status_code == 422
    r = client.post("/api/v1/auth/register", json={"user_id": "userA", "password": PASSWORD, "role": "sub"})
    assert r.status_code == 422


def test_missing_signing_key_is_a_server_error(tmp_path, monkeypatch):
    from fastapi.testclient import TestClient

    from notekeeper.main import create_app

    monkeypatch.setenv("APP_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    monkeypatch.delenv("JWT_SECRET", raising=False)
    client = TestClient(create_app())

    client.post("/api/v1/auth/register", json={"user_id": "userA", "password": PASSWORD})
    r = client.post("/api/v1/auth/login", json={"user_id": "userA", "password": PASSWORD})
    assert r.status_code == 500
    assert r.json()["code"] == "SYS_CONFIGURATION_ERROR"


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_role_named_like_a_jose_claim_cannot_register(client):
    r = client.post("/api/v1/auth/register", json={"user_id": "carol", "password": PASSWORD, "role": "at_hash"})
    assert r.status_code == 422
