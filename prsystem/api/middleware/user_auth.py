"""
User authentication for the PR System API.

Verifies Firebase ID tokens and loads the user's profile document. The token
is taken from ``Authorization: Bearer <token>`` or, for plain browser
navigations such as email links, from the ``__session`` cookie.
"""

from __future__ import annotations

from functools import lru_cache

from cachetools import TTLCache
from fastapi import Depends, HTTPException, Request, status
from firebase_admin import auth as firebase_auth
from firebase_admin.exceptions import FirebaseError
from google.api_core.exceptions import GoogleAPICallError
from starlette.concurrency import run_in_threadpool

from prsystem.config import SESSION_COOKIE_NAME, TOKEN_CACHE_MAX_SIZE, TOKEN_CACHE_TTL_SECONDS
from prsystem.infrastructure.firebase import FirebaseAuthService, UserProfileRepository
from prsystem.observability.logging import get_logger
from prsystem.users.models import AuthenticatedUser

logger = get_logger(__name__)

# Entries expire well inside the one-hour ID token lifetime
_token_cache: TTLCache[str, AuthenticatedUser] = TTLCache(
    maxsize=TOKEN_CACHE_MAX_SIZE, ttl=TOKEN_CACHE_TTL_SECONDS
)


@lru_cache(maxsize=1)
def get_auth_service() -> FirebaseAuthService:
    return FirebaseAuthService()


@lru_cache(maxsize=1)
def get_profile_repository() -> UserProfileRepository:
    return UserProfileRepository()


async def verify_firebase_token(
    token: str,
    auth_service: FirebaseAuthService,
    profiles: UserProfileRepository,
) -> AuthenticatedUser:
    """
    Verify a Firebase ID token and return the user behind it.

    Raises:
        HTTPException: 401 for invalid, expired or revoked tokens and for
            deleted accounts; 503 when Firebase or Firestore cannot be reached
    """
    if token in _token_cache:
        return _token_cache[token]

    try:
        claims = await run_in_threadpool(auth_service.verify_id_token, token)
    except firebase_auth.CertificateFetchError as e:
        logger.error("Token verification backend unavailable: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service unavailable",
        ) from e
    except (
        firebase_auth.InvalidIdTokenError,
        firebase_auth.UserDisabledError,
        firebase_auth.UserNotFoundError,
        ValueError,
    ) as e:
        logger.warning("Invalid token: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    except FirebaseError as e:
        logger.error("Token verification failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service unavailable",
        ) from e

    uid = claims["uid"]
    try:
        user = await run_in_threadpool(profiles.get, uid, claims.get("email", ""))
    except GoogleAPICallError as e:
        logger.error("Profile lookup failed for uid=%s: %s", uid, e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="User profile unavailable",
        ) from e

    _token_cache[token] = user
    logger.info("Authenticated user: %s (cache size: %d)", user, len(_token_cache))
    return user


def extract_token(request: Request) -> str | None:
    """Token from the Authorization header, else the session cookie."""
    authorization = request.headers.get("Authorization")
    if authorization:
        parts = authorization.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid authorization header format. Expected: Bearer <token>",
                headers={"WWW-Authenticate": "Bearer"},
            )
        return parts[1]

    return request.cookies.get(SESSION_COOKIE_NAME) or None


async def get_current_user(
    request: Request,
    auth_service: FirebaseAuthService = Depends(get_auth_service),
    profiles: UserProfileRepository = Depends(get_profile_repository),
) -> AuthenticatedUser:
    """
    FastAPI dependency: the authenticated user, or 401.

    Usage:
        @router.get("/endpoint")
        async def endpoint(user: AuthenticatedUser = Depends(get_current_user)):
            ...
    """
    token = extract_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return await verify_firebase_token(token, auth_service, profiles)


async def get_optional_user(
    request: Request,
    auth_service: FirebaseAuthService = Depends(get_auth_service),
    profiles: UserProfileRepository = Depends(get_profile_repository),
) -> AuthenticatedUser | None:
    """
    FastAPI dependency for optional authentication.

    Returns None when no token is present or the token does not verify.
    """
    try:
        token = extract_token(request)
        if not token:
            return None
        return await verify_firebase_token(token, auth_service, profiles)
    except HTTPException:
        return None


def invalidate_user(uid: str) -> None:
    """Drop cached tokens belonging to ``uid`` (after sign-out)."""
    for token, user in list(_token_cache.items()):
        if user.id == uid:
            _token_cache.pop(token, None)


def clear_token_cache() -> None:
    """Clear the token cache. Useful for testing."""
    _token_cache.clear()
