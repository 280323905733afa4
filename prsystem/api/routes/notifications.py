"""Notification endpoints.

- POST /api/test-email   - send a test message to the procurement inbox (signed-in user)
- GET  /api/pr-link/{id} - the deep link notifications use for a PR
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from prsystem.api.middleware.admin_auth import require_admin_auth
from prsystem.api.middleware.user_auth import extract_token, get_current_user
from prsystem.backend.functions import CallableFunctionsClient
from prsystem.notifications.diagnostics import EmailTestResult, send_test_email
from prsystem.notifications.formatters import generate_pr_link
from prsystem.observability.logging import get_logger
from prsystem.users.models import AuthenticatedUser
from prsystem.utils.error_sanitizer import sanitize_error_message

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["notifications"])


@lru_cache(maxsize=1)
def get_functions_client() -> CallableFunctionsClient:
    return CallableFunctionsClient()


@router.post("/test-email", response_model=EmailTestResult)
async def trigger_test_email(
    request: Request,
    user: AuthenticatedUser = Depends(get_current_user),
    _authenticated: bool = Depends(require_admin_auth),
    client: CallableFunctionsClient = Depends(get_functions_client),
) -> Any:
    """
    Invoke the backend ``sendTestEmail`` function as the signed-in user.

    The caller's ID token is forwarded so the function sees the same user.
    """
    logger.info("Test email requested by %s", user)
    result = await send_test_email(client, id_token=extract_token(request))
    if result.success:
        return result

    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=EmailTestResult(
            success=False,
            message=sanitize_error_message(result.message, status_code=502),
        ).model_dump(),
    )


@router.get("/pr-link/{pr_id}")
async def pr_link(pr_id: str) -> dict[str, str]:
    return {"id": pr_id, "link": generate_pr_link(pr_id)}
