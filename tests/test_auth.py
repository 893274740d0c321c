from datetime import timedelta
from types import SimpleNamespace

from chocostore.utils.hash import hash_password, verify_password
from chocostore.utils.token import create_access_token, decode_access_token


def test_password_hashing():
    hashed = hash_password("s3cret-pass")

    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("s3cret-pass", "")


def test_token_round_trip():
    token = create_access_token(SimpleNamespace(id=7, role="admin"))

    claims = decode_access_token(token)
    assert claims["sub"] == "7"
    assert claims["role"] == "admin"
    assert decode_access_token("not-a-token") is None


def test_first_registration_then_closed(client):
    payload = {
        "email": "owner@example.com",
        "password": "s3cret-pass",
        "confirm_password": "s3cret-pass",
    }

    resp = client.post("/auth/register", json=payload)
    assert resp.status_code == 200
    assert resp.json()["role"] == "admin"

    again = client.post("/auth/register", json={**payload, "email": "other@example.com"})
    assert again.status_code == 403


def test_register_password_mismatch(client):
    resp = client.post("/auth/register", json={
        "email": "owner@example.com",
        "password": "s3cret-pass",
        "confirm_password": "different",
    })
    assert resp.status_code == 422


def test_login_and_me(client, admin_user):
    resp = client.post("/auth/login", json={"email": admin_user.email, "password": "s3cret-pass"})
    assert resp.status_code == 200
    token = resp.json()["access_token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"}).json()
    assert me["email"] == admin_user.email


def test_login_with_wrong_password(client, admin_user):
    resp = client.post("/auth/login", json={"email": admin_user.email, "password": "nope"})
    assert resp.status_code == 401


def test_me_with_bad_token(client):
    resp = client.get("/auth/me", headers={"Authorization": "Bearer junk"})
    assert resp.status_code == 401


def test_logout(client):
    assert client.post("/auth/logout").json() == {"message": "Logout successful"}


def test_expired_token_is_rejected(client, admin_user):
    token = create_access_token(admin_user, expires_delta=timedelta(seconds=-1))

    assert decode_access_token(token) is None
    assert client.get("/auth/me", headers={"Authorization": f"Bearer {token}"}).status_code == 401
