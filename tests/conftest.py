"""
Pytest configuration shared across unit and integration tests.

Provides fake Firebase collaborators so nothing touches the network.
"""

from __future__ import annotations

from typing import Any

import pytest

from prsystem.observability import telemetry
from prsystem.users.models import AuthenticatedUser


class FakeAuthService:
    """Stands in for FirebaseAuthService."""

    def __init__(
        self,
        claims: dict[str, dict[str, Any]] | None = None,
        fail_sign_out: bool = False,
        errors: dict[str, Exception] | None = None,
    ):
        self.claims = claims or {}
        self.errors = errors or {}
        self.fail_sign_out = fail_sign_out
        self.signed_out: list[str] = []
        self.verified: list[str] = []

    def verify_id_token(self, token: str) -> dict[str, Any]:
        from firebase_admin import auth as firebase_auth

        self.verified.append(token)
        if token in self.errors:
            raise self.errors[token]
        if token not in self.claims:
            raise firebase_auth.InvalidIdTokenError("Token is invalid")
        return self.claims[token]

    def sign_out(self, uid: str) -> None:
        if self.fail_sign_out:
            raise RuntimeError("network down")
        self.signed_out.append(uid)


class FakeProfileRepository:
    """Stands in for UserProfileRepository."""

    def __init__(self, profiles: dict[str, AuthenticatedUser] | None = None):
        self.profiles = profiles or {}

    def get(self, uid: str, email: str = "") -> AuthenticatedUser:
        return self.profiles.get(uid) or AuthenticatedUser(id=uid, email=email)


@pytest.fixture
def procurement_user() -> AuthenticatedUser:
    return AuthenticatedUser.model_validate(
        {
            "id": "u1",
            "email": "a@b.com",
            "firstName": "A",
            "lastName": "B",
            "role": "PROC",
            "organization": "1PWR LESOTHO",
            "permissionLevel": 3,
            "permissions": {"canProcessPR": True},
        }
    )


@pytest.fixture
def requester_user() -> AuthenticatedUser:
    return AuthenticatedUser.model_validate(
        {
            "id": "u2",
            "email": "x@y.com",
            "role": "REQ",
            "organization": "1PWR BENIN",
            "permissionLevel": 5,
        }
    )


@pytest.fixture(autouse=True)
def _reset_state():
    """Telemetry counters and the token cache are process-global."""
    from prsystem.api.middleware.user_auth import clear_token_cache

    telemetry.reset()
    clear_token_cache()
    yield
    telemetry.reset()
    clear_token_cache()


@pytest.fixture
def auth_service_factory():
    return FakeAuthService


@pytest.fixture
def profile_repository_factory():
    return FakeProfileRepository
