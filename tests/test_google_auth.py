"""
Tests for the Google Sign-In sub-router, mounted on a standalone app.
"""
import logging
from urllib.parse import parse_qs, urlparse

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from jose import jwt
from starlette.middleware.sessions import SessionMiddleware

from interview_coach.api.routes import auth, google_auth
from interview_coach.api.routes.google_auth import GoogleAuthConfig, create_google_auth_router
from interview_coach.core.auth_dependency import get_db
from interview_coach.core.errors import InterviewCoachError
from interview_coach.main import interview_coach_error_handler

CLAIMS = {
    "sub": "1234567890",
    "email": "gina@example.com",
    "name": "Gina Google",
    "picture": "https://example.com/gina.png",
    "email_verified": True,
}


@pytest.fixture
def remembered():
    return []


def make_client(db_session, hook) -> TestClient:
    config = GoogleAuthConfig(
        client_id="client-id",
        client_secret="client-secret",
        redirect_uri="http://testserver/api/google-auth/google/callback",
        success_redirect="/dashboard",
        failure_redirect="/login",
        on_user_authenticated=hook,
    )
    google_app = FastAPI()
    google_app.add_middleware(SessionMiddleware, secret_key="test-secret")
    google_app.add_exception_handler(InterviewCoachError, interview_coach_error_handler)
    google_app.include_router(auth.router)
    google_app.include_router(create_google_auth_router(config), prefix="/api/google-auth")
    google_app.dependency_overrides[get_db] = lambda: db_session
    return TestClient(google_app)


@pytest.fixture
def google_client(db_session, remembered):
    return make_client(db_session, remembered.append)


@pytest.fixture
def token_endpoint(monkeypatch):
    """Replace the network call to Google's token endpoint."""
    codes = []

    def fake_exchange(config, code):
        codes.append(code)
        return {"access_token": "ya29.access-secret", "id_token": jwt.encode(CLAIMS, "irrelevant", algorithm="HS256")}

    monkeypatch.setattr(google_auth, "exchange_code_for_tokens", fake_exchange)
    return codes


def begin_login(client) -> str:
    response = client.get("/api/google-auth/google", follow_redirects=False)
    assert response.status_code == 302
    return parse_qs(urlparse(response.headers["location"]).query)["state"][0]


def test_login_redirects_to_google(google_client):
    response = google_client.get("/api/google-auth/google", follow_redirects=False)

    location = urlparse(response.headers["location"])
    params = parse_qs(location.query)
    assert f"{location.scheme}://{location.netloc}{location.path}" == google_auth.GOOGLE_AUTH_URL
    assert params["client_id"] == ["client-id"]
    assert params["response_type"] == ["code"]
    assert params["scope"] == ["openid email profile"]
    assert len(params["state"][0]) == 64


def test_callback_success_stores_profile(google_client, token_endpoint, remembered):
    state = begin_login(google_client)

    response = google_client.get(
        "/api/google-auth/google/callback",
        params={"code": "auth-code", "state": state},
        follow_redirects=False,
    )

    assert response.status_code == 302
    assert response.headers["location"] == "/dashboard"
    assert token_endpoint == ["auth-code"]
    assert remembered[0]["id"] == "1234567890"

    session = google_client.get("/api/google-auth/session").json()
    assert session["isAuthenticated"] is True
    assert session["user"]["email"] == "gina@example.com"

    me = google_client.get("/api/auth/user").json()
    assert me == {
        "id": "google:1234567890",
        "email": "gina@example.com",
        "firstName": "Gina",
        "lastName": "Google",
        "profileImageUrl": "https://example.com/gina.png",
        "authProvider": "google",
    }


def test_callback_state_mismatch(google_client, token_endpoint):
    begin_login(google_client)

    response = google_client.get(
        "/api/google-auth/google/callback",
        params={"code": "auth-code", "state": "forged"},
        follow_redirects=False,
    )

    assert response.headers["location"] == "/login"
    assert token_endpoint == []
    assert google_client.get("/api/google-auth/session").json() == {"isAuthenticated": False, "user": None}


def test_callback_state_is_single_use(google_client, token_endpoint):
    state = begin_login(google_client)
    google_client.get("/api/google-auth/google/callback", params={"code": "c1", "state": state}, follow_redirects=False)
    google_client.post("/api/google-auth/logout")

    response = google_client.get(
        "/api/google-auth/google/callback",
        params={"code": "c2", "state": state},
        follow_redirects=False,
    )

    assert response.headers["location"] == "/login"
    assert token_endpoint == ["c1"]


def test_callback_provider_error(google_client):
    response = google_client.get(
        "/api/google-auth/google/callback",
        params={"error": "access_denied"},
        follow_redirects=False,
    )

    assert response.headers["location"] == "/login"


def test_callback_failing_hook_does_not_sign_in(db_session, token_endpoint):
    def broken(profile):
        raise RuntimeError("database down")

    client = make_client(db_session, broken)
    state = begin_login(client)

    response = client.get(
        "/api/google-auth/google/callback",
        params={"code": "auth-code", "state": state},
        follow_redirects=False,
    )

    assert response.headers["location"] == "/login"
    assert client.get("/api/google-auth/session").json()["isAuthenticated"] is False


def test_logout(google_client, token_endpoint):
    state = begin_login(google_client)
    google_client.get("/api/google-auth/google/callback", params={"code": "c", "state": state}, follow_redirects=False)

    response = google_client.post("/api/google-auth/logout")

    assert response.json() == {"success": True}
    assert google_client.get("/api/google-auth/session").json()["isAuthenticated"] is False
    assert google_client.get("/api/auth/user").status_code == 401


def test_callback_logs_redact_code_and_tokens(google_client, token_endpoint, caplog):
    caplog.set_level(logging.DEBUG, logger="interview_coach.api.routes.google_auth")
    state = begin_login(google_client)

    google_client.get(
        "/api/google-auth/google/callback",
        params={"code": "4/secret-auth-code", "state": state},
        follow_redirects=False,
    )

    assert "4/secret-auth-code" not in caplog.text
    assert "ya29.access-secret" not in caplog.text
    assert "***REDACTED***" in caplog.text
    assert "Google user authenticated" in caplog.text
