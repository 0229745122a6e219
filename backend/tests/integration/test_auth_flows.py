"""End-to-end account flows through the ``/api/auth`` routes."""

from __future__ import annotations

import re

from tests.factories.user import DEFAULT_PASSWORD, UserFactory

BASE = "/api/auth"


def _cookie(client, name: str) -> str | None:
    cookie = client.get_cookie(name)
    return cookie.value if cookie is not None else None


def _signup(client, email="shopper@example.com", password="pw-123"):
    return client.post(f"{BASE}/signup", json={"email": email, "password": password})


def test_signup_sets_cookies_and_returns_user(client):
    resp = _signup(client)

    assert resp.status_code == 201
    body = resp.get_json()["data"]
    assert body["email"] == "shopper@example.com"
    assert body["role"] == "user"
    assert "password" not in body and "password_hash" not in body
    assert _cookie(client, "accessToken")
    assert _cookie(client, "refreshToken")
    set_cookie = ",".join(resp.headers.getlist("Set-Cookie"))
    assert "HttpOnly" in set_cookie
    assert "SameSite=Strict" in set_cookie


def test_signup_duplicate_conflicts(client):
    UserFactory(email="dupe@example.com")
    resp = _signup(client, email="dupe@example.com")
    assert resp.status_code == 409
    assert resp.get_json()["detail"] == "User already exists"
    assert _cookie(client, "refreshToken") is None


def test_signup_validation_error(client):
    resp = client.post(f"{BASE}/signup", json={"email": "not-an-email"})
    assert resp.status_code == 422
    assert resp.mimetype == "application/problem+json"


def test_login_bad_credentials_share_one_message(client):
    UserFactory(email="known@example.com")
    wrong_pw = client.post(f"{BASE}/login", json={"email": "known@example.com", "password": "x"})
    unknown = client.post(
        f"{BASE}/login", json={"email": "unknown@example.com", "password": DEFAULT_PASSWORD}
    )

    assert wrong_pw.status_code == unknown.status_code == 401
    assert wrong_pw.get_json()["detail"] == unknown.get_json()["detail"]


def test_profile_requires_auth(client):
    resp = client.get(f"{BASE}/profile")
    assert resp.status_code == 401

    _signup(client, email="me@example.com")
    resp = client.get(f"{BASE}/profile")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["email"] == "me@example.com"


def test_verify_token(client):
    assert client.get(f"{BASE}/verify-token").status_code == 401
    _signup(client, email="verify@example.com")
    resp = client.get(f"{BASE}/verify-token")
    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Token is valid"


def test_logout_then_refresh_with_old_cookie_fails(client):
    _signup(client)
    old_refresh = _cookie(client, "refreshToken")

    resp = client.post(f"{BASE}/logout")
    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Logged out successfully"
    assert _cookie(client, "refreshToken") is None

    client.set_cookie("refreshToken", old_refresh)
    resp = client.post(f"{BASE}/refresh-token")
    assert resp.status_code == 401
    assert resp.get_json()["code"] == "invalid_refresh_token"


def test_logout_without_cookies_succeeds(client):
    resp = client.post(f"{BASE}/logout")
    assert resp.status_code == 200


def test_refresh_issues_new_access_cookie(client):
    _signup(client)
    client.delete_cookie("accessToken")

    resp = client.post(f"{BASE}/refresh-token")

    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Token refreshed successfully"
    assert _cookie(client, "accessToken")
    assert client.get(f"{BASE}/profile").status_code == 200


def test_refresh_without_cookie(client):
    resp = client.post(f"{BASE}/refresh-token")
    assert resp.status_code == 401


def test_login_supersedes_earlier_session(app, client):
    UserFactory(email="multi@example.com")
    creds = {"email": "multi@example.com", "password": DEFAULT_PASSWORD}

    assert client.post(f"{BASE}/login", json=creds).status_code == 200
    first_refresh = _cookie(client, "refreshToken")

    other = app.test_client()
    assert other.post(f"{BASE}/login", json=creds).status_code == 200

    client.set_cookie("refreshToken", first_refresh)
    assert client.post(f"{BASE}/refresh-token").status_code == 401
    assert other.post(f"{BASE}/refresh-token").status_code == 200


def _reset_token(outbox) -> str:
    match = re.search(r"/reset-password/([^\"<]+)", outbox[-1].body_html)
    assert match is not None
    return match.group(1)


def test_forgot_and_reset_password(client, outbox):
    UserFactory(email="reset@example.com")

    resp = client.post(f"{BASE}/forgot-password", json={"email": "reset@example.com"})
    assert resp.status_code == 200
    token = _reset_token(outbox)
    assert "http://localhost:3000/reset-password/" in outbox[-1].body_html

    resp = client.post(f"{BASE}/verify-reset-token", json={"token": token})
    assert resp.status_code == 200
    assert resp.get_json()["valid"] is True

    resp = client.post(f"{BASE}/reset-password", json={"token": token, "newPassword": "brand-new"})
    assert resp.status_code == 200

    old = client.post(
        f"{BASE}/login", json={"email": "reset@example.com", "password": DEFAULT_PASSWORD}
    )
    assert old.status_code == 401
    new = client.post(f"{BASE}/login", json={"email": "reset@example.com", "password": "brand-new"})
    assert new.status_code == 200


def test_forgot_password_unknown_email(client, outbox):
    resp = client.post(f"{BASE}/forgot-password", json={"email": "ghost@example.com"})
    assert resp.status_code == 404
    assert outbox == []


def test_verify_reset_token_rejects_garbage(client):
    resp = client.post(f"{BASE}/verify-reset-token", json={"token": "garbage"})
    assert resp.status_code == 400
    assert resp.get_json()["valid"] is False


def test_reset_password_with_bad_token(client):
    resp = client.post(f"{BASE}/reset-password", json={"token": "garbage", "newPassword": "x"})
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "invalid_token"


def test_signup_keeps_given_name(client, faker):
    name = faker.name()
    email = faker.unique.email()
    resp = client.post(f"{BASE}/signup", json={"email": email, "password": "pw", "name": name})
    assert resp.status_code == 201
    assert resp.get_json()["data"]["name"] == name.strip()


def test_signup_rejects_blank_name(client):
    resp = client.post(
        f"{BASE}/signup", json={"email": "blank@example.com", "password": "pw", "name": "   "}
    )
    assert resp.status_code == 422
    assert "name" in resp.get_json()["details"]["errors"]


def test_signup_rejects_dotless_email_domain(client):
    resp = client.post(f"{BASE}/signup", json={"email": "root@localhost", "password": "pw"})
    assert resp.status_code == 422
    assert "email" in resp.get_json()["details"]["errors"]
