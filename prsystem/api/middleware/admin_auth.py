"""Admin API key check for the debug and test endpoints"""

from __future__ import annotations

import os
import secrets

from fastapi import Header, HTTPException, status

from prsystem.observability.logging import get_logger

logger = get_logger(__name__)


class APIKeyAuth:
    """
    API key authentication for admin endpoints.

    The key is read from PR_ADMIN_API_KEY and sent by callers in the
    ``X-Admin-Key`` header (``Authorization`` carries the user's ID token).
    With no key configured every request is allowed (development mode).
    """

    def __init__(self):
        self.api_key = os.getenv("PR_ADMIN_API_KEY")
        if not self.api_key:
            logger.warning("PR_ADMIN_API_KEY not set - admin endpoints are unprotected!")

    def verify_api_key(self, x_admin_key: str | None = Header(None)) -> bool:
        if not self.api_key:
            return True

        if not x_admin_key:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Missing X-Admin-Key header",
            )

        # Timing-safe comparison
        if not secrets.compare_digest(x_admin_key, self.api_key):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Invalid API key",
            )

        return True


auth = APIKeyAuth()


def require_admin_auth(x_admin_key: str | None = Header(None)) -> bool:
    """
    Dependency for endpoints that require admin authentication.

    Usage:
        @router.post("/api/debug/endpoint")
        async def endpoint(authenticated: bool = Depends(require_admin_auth)):
            ...
    """
    return auth.verify_api_key(x_admin_key)
