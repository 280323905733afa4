"""Unit tests for authentication dependencies

Tests cover:
- Admin key: missing header, wrong key, correct key, development bypass
- Firebase ID tokens: bearer header, session cookie, invalid tokens, caching,
  deleted accounts and backend outages
"""

from __future__ import annotations

import asyncio

import pytest
from fastapi import Depends, FastAPI, HTTPException
from fastapi.testclient import TestClient
from firebase_admin import auth as firebase_auth
from firebase_admin.exceptions import UnavailableError
from google.api_core.exceptions import ServiceUnavailable

from prsystem.api.middleware.admin_auth import APIKeyAuth
from prsystem.api.middleware.user_auth import (
    get_auth_service,
    get_current_user,
    get_optional_user,
    get_profile_repository,
    invalidate_user,
    verify_firebase_token,
)
from prsystem.users.models import AuthenticatedUser

# ============================================================================
# Admin API key
# ============================================================================


def create_admin_app(monkeypatch, api_key: str | None):
    if api_key is None:
        monkeypatch.delenv("PR_ADMIN_API_KEY", raising=False)
    else:
        monkeypatch.setenv("PR_ADMIN_API_KEY", api_key)

    auth_instance = APIKeyAuth()
    test_app = FastAPI()

    @test_app.get("/protected")
    async def protected(_authenticated: bool = Depends(auth_instance.verify_api_key)):
        return {"status": "ok"}

    return test_app


def test_admin_key_rejects_missing_header(monkeypatch):
    client = TestClient(create_admin_app(monkeypatch, "test-key-123"))
    response = client.get("/protected")

    assert response.status_code == 401
    assert "Missing X-Admin-Key header" in response.json()["detail"]


def test_admin_key_rejects_wrong_key(monkeypatch):
    client = TestClient(create_admin_app(monkeypatch, "correct-key"))
    response = client.get("/protected", headers={"X-Admin-Key": "wrong-key"})

    assert response.status_code == 403
    assert "Invalid API key" in response.json()["detail"]


def test_admin_key_accepts_correct_key(monkeypatch):
    client = TestClient(create_admin_app(monkeypatch, "correct-key"))
    response = client.get("/protected", headers={"X-Admin-Key": "correct-key"})

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_admin_key_bypass_when_not_configured(monkeypatch):
    client = TestClient(create_admin_app(monkeypatch, None))

    assert client.get("/protected").status_code == 200


# ============================================================================
# Firebase ID tokens
# ============================================================================


@pytest.fixture
def user_app(auth_service_factory, profile_repository_factory, procurement_user):
    auth_service = auth_service_factory(
        claims={"good-token": {"uid": "u1", "email": "a@b.com"}, "new-token": {"uid": "n1"}}
    )
    profiles = profile_repository_factory({"u1": procurement_user})

    test_app = FastAPI()

    @test_app.get("/me")
    async def me(user: AuthenticatedUser = Depends(get_current_user)):
        return {"id": user.id, "email": user.email}

    @test_app.get("/maybe")
    async def maybe(user: AuthenticatedUser | None = Depends(get_optional_user)):
        return {"id": user.id if user else None}

    test_app.dependency_overrides[get_auth_service] = lambda: auth_service
    test_app.dependency_overrides[get_profile_repository] = lambda: profiles
    test_app.state.auth_service = auth_service
    return test_app


def test_current_user_from_bearer_token(user_app):
    response = TestClient(user_app).get("/me", headers={"Authorization": "Bearer good-token"})

    assert response.status_code == 200
    assert response.json() == {"id": "u1", "email": "a@b.com"}


def test_current_user_from_session_cookie(user_app):
    client = TestClient(user_app, cookies={"__session": "good-token"})

    assert client.get("/me").json()["id"] == "u1"


def test_current_user_missing_token(user_app):
    response = TestClient(user_app).get("/me")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_current_user_invalid_scheme(user_app):
    response = TestClient(user_app).get("/me", headers={"Authorization": "Basic abc"})

    assert response.status_code == 401
    assert "Invalid authorization header format" in response.json()["detail"]


def test_current_user_invalid_token(user_app):
    response = TestClient(user_app).get("/me", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or expired token"


def test_user_without_profile_document_gets_identity_only(user_app):
    response = TestClient(user_app).get("/me", headers={"Authorization": "Bearer new-token"})

    assert response.json() == {"id": "n1", "email": ""}


def test_optional_user_returns_none_on_bad_token(user_app):
    client = TestClient(user_app)

    assert client.get("/maybe").json() == {"id": None}
    assert client.get("/maybe", headers={"Authorization": "Bearer nope"}).json() == {"id": None}
    assert client.get("/maybe", headers={"Authorization": "Bearer good-token"}).json() == {"id": "u1"}


def test_verified_tokens_are_cached(user_app):
    client = TestClient(user_app)
    headers = {"Authorization": "Bearer good-token"}

    client.get("/me", headers=headers)
    client.get("/me", headers=headers)

    assert user_app.state.auth_service.verified == ["good-token"]


def test_invalidate_user_forces_reverification(user_app):
    client = TestClient(user_app)
    headers = {"Authorization": "Bearer good-token"}

    client.get("/me", headers=headers)
    invalidate_user("u1")
    client.get("/me", headers=headers)

    assert user_app.state.auth_service.verified == ["good-token", "good-token"]


def test_certificate_fetch_failure_is_503(profile_repository_factory):
    class Unreachable:
        def verify_id_token(self, token):
            raise firebase_auth.CertificateFetchError("no certs", cause=None)

    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(verify_firebase_token("t", Unreachable(), profile_repository_factory()))

    assert exc_info.value.status_code == 503


def test_deleted_account_is_401(auth_service_factory, profile_repository_factory):
    auth_service = auth_service_factory(
        errors={"stale": firebase_auth.UserNotFoundError("No user record found")}
    )

    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(verify_firebase_token("stale", auth_service, profile_repository_factory()))

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Invalid or expired token"


def test_other_firebase_errors_are_503(auth_service_factory, profile_repository_factory):
    auth_service = auth_service_factory(errors={"t": UnavailableError("backend down")})

    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(verify_firebase_token("t", auth_service, profile_repository_factory()))

    assert exc_info.value.status_code == 503


def test_profile_store_failure_is_503(auth_service_factory):
    class DownProfiles:
        def get(self, uid, email=""):
            raise ServiceUnavailable("firestore unavailable")

    auth_service = auth_service_factory(claims={"t": {"uid": "u1"}})

    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(verify_firebase_token("t", auth_service, DownProfiles()))

    assert exc_info.value.status_code == 503
    assert exc_info.value.detail == "User profile unavailable"


def test_optional_user_is_none_for_deleted_account(auth_service_factory, profile_repository_factory):
    test_app = FastAPI()

    @test_app.get("/maybe")
    async def maybe(user: AuthenticatedUser | None = Depends(get_optional_user)):
        return {"id": user.id if user else None}

    auth_service = auth_service_factory(
        errors={"stale": firebase_auth.UserNotFoundError("No user record found")}
    )
    test_app.dependency_overrides[get_auth_service] = lambda: auth_service
    test_app.dependency_overrides[get_profile_repository] = lambda: profile_repository_factory()

    client = TestClient(test_app, cookies={"__session": "stale"})

    assert client.get("/maybe").json() == {"id": None}
