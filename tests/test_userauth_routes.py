from fastapi.testclient import TestClient

from components.userauth import (
    AuthConfig, AuthService, BcryptPasswordHasher, InMemoryUserStore, JWTTokenSigner, create_app,
)


OPERATOR = {"x-admin-key": "operator-secret"}


def make_client(admin_api_key="operator-secret"):
    cfg = AuthConfig(json_token_key="route-secret", product_key_secret="pk-secret", bcrypt_rounds=4,
                     admin_api_key=admin_api_key)
    svc = AuthService(
        user_store=InMemoryUserStore(),
        hasher=BcryptPasswordHasher(),
        signer=JWTTokenSigner(cfg.json_token_key),
        cfg=cfg,
    )
    return TestClient(create_app(svc))


BUYER = {"email": "alice@example.com", "password": "secret123", "name": "Alice", "phone": "555-0100"}


def test_buyer_signup_signin_and_me_flow():
    client = make_client()

    res = client.post("/auth/signup/BUYER", json=BUYER)
    assert res.status_code == 201
    body = res.json()
    assert body["ok"] is True
    signup_token = body["result"]["token"]

    res = client.post("/auth/signin", json={"email": BUYER["email"], "password": BUYER["password"]})
    assert res.status_code == 200
    token = res.json()["result"]["token"]

    res = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 200
    me = res.json()["result"]["user"]
    assert me["name"] == "Alice"
    assert me["id"] == 1

    res = client.get("/auth/me", headers={"Authorization": f"Bearer {signup_token}"})
    assert res.json()["result"]["user"]["id"] == 1


def test_duplicate_signup_returns_409():
    client = make_client()
    assert client.post("/auth/signup/BUYER", json=BUYER).status_code == 201

    res = client.post("/auth/signup/BUYER", json=BUYER)
    assert res.status_code == 409
    body = res.json()
    assert body["ok"] is False
    assert body["error"]["type"] == "CONFLICT"
    assert body["error"]["code"] == "CONFLICT"


def test_signin_errors_are_uniform():
    client = make_client()
    client.post("/auth/signup/BUYER", json=BUYER)

    wrong_pw = client.post("/auth/signin", json={"email": BUYER["email"], "password": "nope"})
    no_user = client.post("/auth/signin", json={"email": "ghost@example.com", "password": "secret123"})

    assert wrong_pw.status_code == no_user.status_code == 400
    assert wrong_pw.json()["error"] == no_user.json()["error"]
    assert wrong_pw.json()["error"]["code"] == "INVALID_CREDENTIALS"


def test_seller_signup_requires_product_key():
    client = make_client()
    seller = dict(BUYER, email="sam@example.com", name="Sam")

    res = client.post("/auth/signup/SELLER", json=seller)
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"

    res = client.post("/auth/signup/SELLER", json=dict(seller, product_key="guess"))
    assert res.status_code == 401

    res = client.post("/auth/key", headers=OPERATOR, json={"email": "sam@example.com", "user_type": "SELLER"})
    assert res.status_code == 200
    key = res.json()["result"]["product_key"]

    # key is bound to the account type it was issued for
    res = client.post("/auth/signup/ADMIN", json=dict(seller, product_key=key))
    assert res.status_code == 401

    res = client.post("/auth/signup/SELLER", json=dict(seller, product_key=key))
    assert res.status_code == 201
    assert res.json()["ok"] is True


def test_unknown_user_type_is_rejected():
    client = make_client()
    res = client.post("/auth/signup/REALTOR", json=BUYER)
    assert res.status_code == 422


def test_me_requires_valid_bearer_token():
    client = make_client()
    assert client.get("/auth/me").status_code == 401
    assert client.get("/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401

    other = JWTTokenSigner("someone-else").sign({"name": "Mallory", "id": 1}, expires_in=60)
    assert client.get("/auth/me", headers={"Authorization": f"Bearer {other}"}).status_code == 401


def test_request_id_is_echoed():
    client = make_client()
    res = client.post("/auth/signin", headers={"x-request-id": "req-42"},
                      json={"email": "a@b.com", "password": "x"})
    assert res.headers["x-request-id"] == "req-42"
    assert res.json()["meta"]["request_id"] == "req-42"


def test_product_key_route_refuses_callers_without_operator_key():
    client = make_client()
    body = {"email": "evil@example.com", "user_type": "ADMIN"}

    assert client.post("/auth/key", json=body).status_code == 403
    assert client.post("/auth/key", headers={"x-admin-key": "wrong"}, json=body).status_code == 403

    res = client.post("/auth/signup/ADMIN", json=dict(BUYER, email="evil@example.com", product_key="anything"))
    assert res.status_code == 401


def test_product_key_route_disabled_without_configured_operator_key():
    client = make_client(admin_api_key="")
    res = client.post("/auth/key", headers={"x-admin-key": ""}, json={"email": "a@b.com", "user_type": "SELLER"})
    assert res.status_code == 403


def test_signin_with_padded_email_matches_signup():
    client = make_client()
    assert client.post("/auth/signup/BUYER", json=dict(BUYER, email=" pad@example.com ")).status_code == 201
    res = client.post("/auth/signin", json={"email": " pad@example.com ", "password": BUYER["password"]})
    assert res.status_code == 200
    assert res.json()["ok"] is True
