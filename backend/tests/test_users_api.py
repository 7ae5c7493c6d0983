PASSWORD = "StrongPassw0rd!"


def test_read_own_profile(client, login):
    headers = login("alice", role="admin")
    r = client.get("/api/v1/user/alice", headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["user_id"] == "alice"
    assert body["role"] == "admin"
    assert "hashed_password" not in body


def test_other_accounts_look_missing(client, login):
    login("alice")
    bobby = login("bobby")

    assert client.get("/api/v1/user/alice", headers=bobby).status_code == 404
    assert client.put("/api/v1/user/alice", headers=bobby, json={"password": "NewPassw0rd!"}).status_code == 404
    assert client.delete("/api/v1/user/alice", headers=bobby).status_code == 404
    assert client.get("/api/v1/user/alice", headers=login("alice")).status_code == 200


def test_change_password(client, login):
    headers = login("alice")
    r = client.put("/api/v1/user/alice", headers=headers, json={"password": "NewPassw0rd!"})
    assert r.status_code == 200

    r = client.post("/api/v1/auth/login", json={"user_id": "alice", "password": PASSWORD})
    assert r.status_code == 401
    r = client.post("/api/v1/auth/login", json={"user_id": "alice", "password": "NewPassw0rd!"})
    assert r.status_code == 200


def test_change_password_validation(client, login):
    headers = login("alice")
    r = client.put("/api/v1/user/alice", headers=headers, json={"password": "short"})
    assert r.status_code == 422


def test_delete_account_drops_notes(client, login):
    headers = login("alice")
    client.post("/api/v1/note", headers=headers, json={"title": "t1"})
    assert client.get("/api/v1/note/alice", headers=headers).status_code == 200

    r = client.delete("/api/v1/user/alice", headers=headers)
    assert r.status_code == 200
    assert r.json() == {"deleted": True}

    r = client.post("/api/v1/auth/login", json={"user_id": "alice", "password": PASSWORD})
    assert r.status_code == 401
    # token outlives the account, but the aggregate is gone
    assert client.get("/api/v1/note/alice", headers=headers).status_code == 404
    assert client.get("/api/v1/user/alice", headers=headers).status_code == 404


def test_delete_account_without_notes(client, login):
    headers = login("alice")
    assert client.delete("/api/v1/user/alice", headers=headers).status_code == 200
    assert client.delete("/api/v1/user/alice", headers=headers).status_code == 404


def test_requires_token(client):
    assert client.get("/api/v1/user/alice").status_code == 401
    assert client.delete("/api/v1/user/alice").status_code == 401
