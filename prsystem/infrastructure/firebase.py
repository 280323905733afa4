"""
Firebase Admin SDK access.

The default app is initialized lazily on first use. Credentials come from
``FIREBASE_SERVICE_ACCOUNT`` (path to a service-account JSON file) when set,
otherwise Application Default Credentials. The project comes from the
credential unless ``FIREBASE_PROJECT_ID`` names one explicitly.
"""

from __future__ import annotations

import os
from typing import Any

import firebase_admin
from firebase_admin import auth, credentials, firestore
from google.cloud.firestore import Client as FirestoreClient

from prsystem.config import USERS_COLLECTION, get_firebase_project_id
from prsystem.observability.logging import get_logger
from prsystem.users.models import AuthenticatedUser

logger = get_logger(__name__)


def get_app(service_account_path: str | None = None) -> firebase_admin.App:
    """Return the default Firebase app, initializing it on first call."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    path = service_account_path or os.getenv("FIREBASE_SERVICE_ACCOUNT")
    if path:
        logger.info("Initializing Firebase app from service account file")
        cred: credentials.Base = credentials.Certificate(path)
    else:
        logger.info("Initializing Firebase app with application default credentials")
        cred = credentials.ApplicationDefault()

    project_id = get_firebase_project_id()
    options = {"projectId": project_id} if project_id else None
    return firebase_admin.initialize_app(cred, options)


def get_firestore() -> FirestoreClient:
    return firestore.client(app=get_app())


class FirebaseAuthService:
    """Server-side counterpart of the client auth service."""

    def __init__(self, app: firebase_admin.App | None = None):
        self._app = app

    @property
    def app(self) -> firebase_admin.App:
        if self._app is None:
            self._app = get_app()
        return self._app

    def verify_id_token(self, token: str) -> dict[str, Any]:
        """Decode and verify a Firebase ID token (raises on invalid/revoked tokens)."""
        return auth.verify_id_token(token, app=self.app, check_revoked=True)

    def sign_out(self, uid: str) -> None:
        """
        Sign a user out everywhere by revoking their refresh tokens.

        Side Effects:
            - Invalidates every session of ``uid`` at the identity provider
        """
        auth.revoke_refresh_tokens(uid, app=self.app)
        logger.info("Revoked refresh tokens for uid=%s", uid)


class UserProfileRepository:
    """Reads ``users/{uid}`` profile documents."""

    def __init__(self, db: FirestoreClient | None = None):
        self._db = db

    @property
    def db(self) -> FirestoreClient:
        if self._db is None:
            self._db = get_firestore()
        return self._db

    def get(self, uid: str, email: str = "") -> AuthenticatedUser:
        """
        Load the profile for ``uid``.

        A user without a profile document still gets an ``AuthenticatedUser``
        carrying just the identity fields.
        """
        snapshot = self.db.collection(USERS_COLLECTION).document(uid).get()
        data = snapshot.to_dict() if snapshot.exists else None
        if not data:
            logger.warning("No profile document for uid=%s", uid)
            return AuthenticatedUser(id=uid, email=email)

        data["email"] = data.get("email") or email
        data["id"] = uid
        return AuthenticatedUser.model_validate(data)
