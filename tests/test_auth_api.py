from conftest import bearer, register_and_login


def test_register_and_login_flow(client):
    email = "user1@example.com"
    password = "password123"

    res = client.post("/api/users/register", json={"email": email, "password": password})
    assert res.status_code == 201, res.text
    assert res.json() == {"id": 0, "email": email}

    res = client.post("/api/users/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    token = res.json()["token"]

    res_me = client.get("/api/users/me", headers=bearer(token))
    assert res_me.status_code == 200, res_me.text
    assert res_me.json() == {"id": 0, "email": email}


def test_register_never_returns_password_material(client):
    res = client.post("/api/users/register", json={"email": "a@example.com", "password": "pw-secret"})
    body = res.text
    assert "pw-secret" not in body
    assert "password" not in body
    assert "$2b$" not in body


def test_duplicate_registration(client):
    client.post("/api/users/register", json={"email": "dup@example.com", "password": "pw"})
    res = client.post("/api/users/register", json={"email": "dup@example.com", "password": "pw"})
    assert res.status_code == 400
    assert res.json()["error"] == "DuplicateEmail"


def test_register_requires_fields(client):
    res = client.post("/api/users/register", json={"email": "x@example.com"})
    assert res.status_code == 400
    assert res.json()["error"] == "ValidationError"

    res = client.post("/api/users/register", json={"email": "not-an-email", "password": "pw"})
    assert res.status_code == 400


def test_invalid_login(client):
    register_and_login(client, "known@example.com", "right-password")

    res = client.post("/api/users/login", json={"email": "known@example.com", "password": "wrong"})
    assert res.status_code == 401
    assert res.json()["error"] == "InvalidCredentials"

    res = client.post("/api/users/login", json={"email": "unknown@example.com", "password": "wrong"})
    assert res.status_code == 401


def test_missing_token_is_401(client):
    res = client.get("/api/users/me")
    assert res.status_code == 401
    assert res.json()["error"] == "MissingToken"
    assert res.headers["WWW-Authenticate"] == "Bearer"

    res = client.get("/api/users/me", headers={"Authorization": "Basic abc"})
    assert res.status_code == 401


def test_invalid_token_is_403(client):
    res = client.get("/api/users/me", headers=bearer("not-a-token"))
    assert res.status_code == 403
    assert res.json()["error"] == "InvalidToken"


def test_token_expiry(client, clock):
    token = register_and_login(client, "expire@example.com")

    clock.advance(59 * 60)
    assert client.get("/api/users/me", headers=bearer(token)).status_code == 200

    clock.advance(2 * 60)
    res = client.get("/api/users/me", headers=bearer(token))
    assert res.status_code == 403
    # Same response as a forged token
    assert res.json() == client.get("/api/users/me", headers=bearer("forged")).json()


def test_login_token_carries_account_claims(client, storefront):
    token = register_and_login(client, "claims@example.com")
    claims = storefront.tokens.verify(token)
    assert claims.email == "claims@example.com"
    assert claims.is_admin is True


def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"


def test_emails_differing_only_in_case_are_distinct_accounts(client):
    first = client.post("/api/users/register", json={"email": "a@example.com", "password": "pw"})
    second = client.post("/api/users/register", json={"email": "a@EXAMPLE.com", "password": "pw"})
    third = client.post("/api/users/register", json={"email": "Bob@Example.COM", "password": "pw"})

    assert first.status_code == 201, first.text
    assert second.status_code == 201, second.text
    assert third.status_code == 201, third.text
    assert first.json() == {"id": 0, "email": "a@example.com"}
    assert second.json() == {"id": 1, "email": "a@EXAMPLE.com"}
    assert third.json() == {"id": 2, "email": "Bob@Example.COM"}


    res = client.post("/api/users/login", json={"email": "Bob@Example.COM", "password": "pw"})
    assert res.status_code == 200, res.text
    me = client.get("/api/users/me", headers=bearer(res.json()["token"]))
    assert me.json() == {"id": 2, "email": "Bob@Example.COM"}

    res = client.post("/api/users/login", json={"email": "bob@example.com", "password": "pw"})
    assert res.status_code == 401
