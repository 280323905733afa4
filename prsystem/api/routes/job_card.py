"""Job Card redirect endpoint.

Email links point here. A signed-in user is forwarded to the Job Card system
with a 303, which replaces the page instead of adding a history entry. Anyone
else gets the "Redirecting..." page, which re-checks every few seconds until
the login flow has set the session cookie.
"""

from __future__ import annotations

import html

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from prsystem.api.middleware.user_auth import get_optional_user
from prsystem.auth.store import AuthStateStore
from prsystem.redirect.job_card import JobCardRedirect
from prsystem.users.models import AuthenticatedUser

router = APIRouter(tags=["job-card"])

LOADING_MESSAGE = "Redirecting to Job Cards..."
RECHECK_SECONDS = 2


class ResponseNavigator:
    """Captures the navigation target so it can become a redirect response."""

    def __init__(self):
        self.url: str | None = None

    def replace(self, url: str) -> None:
        self.url = url


def render_loading_page(message: str = LOADING_MESSAGE) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
    <title>{html.escape(message)}</title>
    <meta charset="utf-8">
    <meta http-equiv="refresh" content="{RECHECK_SECONDS}">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <style>
        body {{ display: flex; flex-direction: column; align-items: center;
               justify-content: center; height: 100vh; margin: 0;
               font-family: Roboto, Helvetica, Arial, sans-serif; }}
        .spinner {{ width: 40px; height: 40px; border: 4px solid #ddd;
                   border-top-color: #1976d2; border-radius: 50%;
                   animation: spin 1s linear infinite; }}
        @keyframes spin {{ to {{ transform: rotate(360deg); }} }}
    </style>
</head>
<body>
    <div class="spinner"></div>
    <h2>{html.escape(message)}</h2>
</body>
</html>"""


@router.get("/job-card", response_model=None)
async def job_card_redirect(
    user: AuthenticatedUser | None = Depends(get_optional_user),
) -> Response:
    navigator = ResponseNavigator()
    controller = JobCardRedirect(AuthStateStore(user), navigator)
    teardown = controller.bind()
    teardown()

    if navigator.url:
        return RedirectResponse(navigator.url, status_code=303)

    return HTMLResponse(render_loading_page(), headers={"Cache-Control": "no-store"})
