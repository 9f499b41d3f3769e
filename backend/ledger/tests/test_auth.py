"""
Tests for authentication endpoints.
"""
from datetime import timedelta
from fastapi import Response
from ledger.api.cookies import set_session_cookie
from ledger.core.config import Settings, settings
from ledger.core.security import dummy_password_hash
from ledger.core.utils import utcnow
from ledger.models.session import AuthSession
from conftest import register, PASSWORD

COOKIE = settings.SESSION_COOKIE_NAME


def test_register_sets_session_cookie(client):
    """Test registration signs the user in."""
    response = register(client, email="  New@Example.COM ")
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["email"] == "new@example.com"
    assert body["data"]["name"] == "Alice"
    assert "passwordHash" not in body["data"]

    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith(f"{COOKIE}=")
    assert "HttpOnly" in set_cookie
    assert "SameSite=lax" in set_cookie
    assert "Path=/" in set_cookie
    assert "expires=" in set_cookie.lower()
    assert "Secure" not in set_cookie

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["data"]["email"] == "new@example.com"


def test_register_blank_name_is_stored_as_null(client):
    response = register(client, name="   ")
    assert response.status_code == 201
    assert response.json()["data"]["name"] is None


def test_register_password_mismatch(client):
    """Test registration rejects mismatched confirmation."""
    response = client.post(
        "/api/auth/register",
        json={
            "email": "a@example.com",
            "password": "secret123",
            "confirmPassword": "secret124"
        }
    )
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Passwords do not match"}


def test_register_short_password(client):
    response = register(client, password="12345")
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_register_invalid_email(client):
    response = register(client, email="not-an-email")
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_register_duplicate_email_is_case_insensitive(client):
    assert register(client, email="dup@example.com").status_code == 201
    response = register(client, email="DUP@example.com")
    assert response.status_code == 409
    assert response.json()["success"] is False


def test_login(client, db):
    """Test user login."""
    register(client, email="login@example.com")
    client.cookies.clear()

    response = client.post(
        "/api/auth/login",
        json={"email": "LOGIN@example.com", "password": PASSWORD}
    )
    assert response.status_code == 200
    assert response.json()["data"]["email"] == "login@example.com"
    assert client.cookies.get(COOKIE)
    # One session from registration, one from login
    assert db.query(AuthSession).count() == 2


def test_login_invalid_credentials_are_indistinguishable(client):
    """Unknown email and wrong password give the same status and body."""
    register(client, email="known@example.com")
    client.cookies.clear()

    wrong_password = client.post(
        "/api/auth/login",
        json={"email": "known@example.com", "password": "wrongpassword"}
    )
    unknown_email = client.post(
        "/api/auth/login",
        json={"email": "nobody@example.com", "password": "wrongpassword"}
    )
    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert "set-cookie" not in wrong_password.headers


def test_login_requires_email_and_password(client):
    response = client.post("/api/auth/login", json={"email": " ", "password": ""})
    assert response.status_code == 400


def test_protected_route_without_cookie(client):
    response = client.get("/api/people")
    assert response.status_code == 401
    assert response.json()["success"] is False
    # No cookie was sent, so there is nothing to clear
    assert "set-cookie" not in response.headers


def test_unknown_token_is_unauthenticated_and_cleared(client):
    client.cookies.set(COOKIE, "deadbeef" * 8)
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith(f'{COOKIE}=""') or "Max-Age=0" in set_cookie


def test_logout_then_reuse_old_cookie(auth_client, db):
    """Sign-out followed by reuse of the old cookie value is unauthenticated."""
    token = auth_client.cookies.get(COOKIE)
    assert token

    response = auth_client.post("/api/auth/logout")
    assert response.status_code == 200
    assert db.query(AuthSession).count() == 0

    auth_client.cookies.set(COOKIE, token)
    response = auth_client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_logout_without_session_is_ok(client):
    response = client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Signed out"}


def test_expired_session_is_removed_on_lookup(auth_client, db):
    record = db.query(AuthSession).one()
    record.expires = record.expires.replace(year=2000)
    db.commit()

    response = auth_client.get("/api/auth/me")
    assert response.status_code == 401
    assert db.query(AuthSession).count() == 0


def test_sessions_are_independent_per_login(auth_client):
    """Logging out one session leaves the other valid."""
    first = auth_client.cookies.get(COOKIE)
    auth_client.cookies.clear()
    auth_client.post("/api/auth/login", json={"email": "alice@example.com", "password": PASSWORD})
    second = auth_client.cookies.get(COOKIE)
    assert first != second

    auth_client.post("/api/auth/logout")
    auth_client.cookies.set(COOKIE, first)
    assert auth_client.get("/api/auth/me").status_code == 200


def test_session_cookie_is_secure_in_production():
    production = Settings(AUTH_SECRET="test-secret-key", ENVIRONMENT="production")
    assert production.cookie_secure is True

    response = Response()
    set_session_cookie(response, "token", utcnow() + timedelta(days=30), config=production)

    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith(f"{production.SESSION_COOKIE_NAME}=token")
    assert "Secure" in set_cookie
    assert "HttpOnly" in set_cookie


def test_dummy_hash_is_ready_before_first_login(client):
    assert dummy_password_hash.cache_info().currsize == 1
    misses = dummy_password_hash.cache_info().misses

    response = client.post(
        "/api/auth/login",
        json={"email": "nobody@example.com", "password": "wrongpassword"}
    )

    assert response.status_code == 401
    assert dummy_password_hash.cache_info().misses == misses


def test_envelope_omits_empty_message_but_keeps_null_fields(client):
    register(client, name="   ")

    body = client.get("/api/auth/me").json()

    assert "message" not in body
    assert body["success"] is True
    assert "name" in body["data"]
    assert body["data"]["name"] is None
