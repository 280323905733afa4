"""
Admin/debug helpers for session problems.

- ``force_user_refresh``: drop the cached session and sign the user out, for
  when permission changes are not showing up.
- ``describe_user``: read-only summary of the signed-in user.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from pydantic import BaseModel

from prsystem.auth.permissions import get_permission_name, is_procurement_level
from prsystem.auth.store import AuthStateStore
from prsystem.observability.logging import get_logger
from prsystem.observability.telemetry import counter
from prsystem.users.models import AuthenticatedUser

logger = get_logger(__name__)


class SignOutService(Protocol):
    def sign_out(self, uid: str) -> None: ...


class RefreshResult(BaseModel):
    success: bool
    message: str


class UserDebugInfo(BaseModel):
    """What the debug panel shows about the current user."""

    logged_in: bool
    email: str | None = None
    role: str | None = None
    permission_level: int | None = None
    permission_name: str | None = None
    organization: str | None = None
    is_procurement: bool = False
    can_process_pr: bool = False


def force_user_refresh(
    store: AuthStateStore,
    auth_service: SignOutService,
    reload: Callable[[], None],
) -> RefreshResult:
    """
    Clear local auth state, sign out, then reload.

    The order matters: state is cleared before sign-out so nothing can read
    the stale user in between, and reload only runs once sign-out returned.
    A failed sign-out is logged and reported; no reload happens in that case.

    Side Effects:
        - Clears ``store``
        - Revokes the user's sessions via ``auth_service``
        - Calls ``reload`` on success
    """
    user = store.user
    logger.info("Forcing user refresh...")

    store.clear_user()

    try:
        if user is not None:
            auth_service.sign_out(user.id)
    except Exception as e:
        logger.error("Error forcing refresh: %s", e)
        counter("debug.force_refresh.error")
        return RefreshResult(success=False, message=f"Error: {e}")

    reload()
    counter("debug.force_refresh.ok")
    return RefreshResult(success=True, message="User signed out; reloading")


def describe_user(user: AuthenticatedUser | None) -> UserDebugInfo:
    if user is None:
        return UserDebugInfo(logged_in=False)

    return UserDebugInfo(
        logged_in=True,
        email=user.email,
        role=user.role,
        permission_level=user.permission_level,
        permission_name=get_permission_name(user.permission_level),
        organization=user.organization,
        is_procurement=is_procurement_level(user.permission_level),
        can_process_pr=user.permissions.can_process_pr,
    )
