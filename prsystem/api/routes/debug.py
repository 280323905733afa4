"""Admin debug endpoints.

- GET  /api/debug/user           - what the server thinks of the caller
- POST /api/debug/force-refresh  - sign the caller out everywhere and send them home
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, RedirectResponse, Response
from starlette.concurrency import run_in_threadpool

from prsystem.admin.debug import UserDebugInfo, describe_user, force_user_refresh
from prsystem.api.middleware.admin_auth import require_admin_auth
from prsystem.api.middleware.user_auth import (
    get_auth_service,
    get_optional_user,
    invalidate_user,
)
from prsystem.auth.store import AuthStateStore
from prsystem.config import SESSION_COOKIE_NAME
from prsystem.infrastructure.firebase import FirebaseAuthService
from prsystem.users.models import AuthenticatedUser
from prsystem.utils.error_sanitizer import sanitize_error_message

router = APIRouter(prefix="/api/debug", tags=["debug"])


@router.get("/user", response_model=UserDebugInfo)
async def debug_user(
    _authenticated: bool = Depends(require_admin_auth),
    user: AuthenticatedUser | None = Depends(get_optional_user),
) -> UserDebugInfo:
    return describe_user(user)


@router.post("/force-refresh", response_model=None)
async def force_refresh(
    _authenticated: bool = Depends(require_admin_auth),
    user: AuthenticatedUser | None = Depends(get_optional_user),
    auth_service: FirebaseAuthService = Depends(get_auth_service),
) -> Response:
    """
    Clear the caller's session and reload the app root.

    Side Effects:
        - Revokes the caller's refresh tokens
        - Drops the caller's cached token verifications
        - Deletes the session cookie (success only)
    """
    store = AuthStateStore(user)
    reload_requested = False

    def reload() -> None:
        nonlocal reload_requested
        reload_requested = True

    result = await run_in_threadpool(force_user_refresh, store, auth_service, reload)
    if user is not None:
        invalidate_user(user.id)

    if not reload_requested:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": sanitize_error_message(result.message, status_code=500),
            },
        )

    response = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(SESSION_COOKIE_NAME)
    return response
