"""Centralized configuration for the PR System glue service.

Two URL lookups live here and stay separate:

- ``get_environment_config()`` resolves the general app base URL from
  ``PR_APP_ENV`` (development | staging | production).
- ``get_pr_system_url()`` always returns the production PR System URL.
  Links embedded in outbound notifications must resolve no matter where the
  sending code runs, so this one never looks at the environment.

Environment variable overrides use safe defaults so the app starts without
extra env configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

# --- App ---
APP_NAME: str = "PR System"
APP_VERSION: str = "1.0.0"


@dataclass(frozen=True)
class EnvironmentConfig:
    """Per-environment URLs."""

    base_url: str
    pr_system_url: str
    env: str


PRODUCTION_PR_SYSTEM_URL: Final[str] = "https://pr.1pwrafrica.com"

ENVIRONMENTS: dict[str, EnvironmentConfig] = {
    "development": EnvironmentConfig(
        base_url="http://localhost:5173",
        pr_system_url=PRODUCTION_PR_SYSTEM_URL,
        env="development",
    ),
    "staging": EnvironmentConfig(
        base_url="https://staging.1pwr.com",
        pr_system_url=PRODUCTION_PR_SYSTEM_URL,
        env="staging",
    ),
    "production": EnvironmentConfig(
        base_url="https://app.1pwr.com",
        pr_system_url=PRODUCTION_PR_SYSTEM_URL,
        env="production",
    ),
}

DEFAULT_ENVIRONMENT: str = "development"


def get_environment_name() -> str:
    """Return the active environment name, falling back to development."""
    env = os.getenv("PR_APP_ENV", DEFAULT_ENVIRONMENT).strip().lower()
    return env if env in ENVIRONMENTS else DEFAULT_ENVIRONMENT


def get_environment_config() -> EnvironmentConfig:
    """Return the URL set for the active environment."""
    return ENVIRONMENTS[get_environment_name()]


def get_pr_system_url() -> str:
    """PR System base URL for notification links. Always production."""
    return PRODUCTION_PR_SYSTEM_URL


# --- Job Card handoff ---
JOB_CARD_URL: str = "https://prod.1pwrafrica.com"

# --- Display formatting ---
NOT_SPECIFIED: Final[str] = "Not specified"
UNKNOWN_USER: Final[str] = "Unknown User"
DEFAULT_CURRENCY: str = "USD"
DISPLAY_LOCALE: str = "en_US"

# --- Firebase ---
# Project whose Cloud Functions serve callable requests when no override is set
DEFAULT_FUNCTIONS_PROJECT: str = "pr-system-4ea55"
FIREBASE_FUNCTIONS_REGION: str = os.getenv("FIREBASE_FUNCTIONS_REGION", "us-central1")
FUNCTIONS_TIMEOUT_SECONDS: float = float(os.getenv("PR_FUNCTIONS_TIMEOUT", "30.0"))
SERVICE_ACCOUNT_FILENAME: str = "firebase-service-account.json"

USERS_COLLECTION: str = "users"
ORGANIZATIONS_COLLECTION: str = "referenceData_organizations"

# Firebase Hosting only forwards this cookie to backends
SESSION_COOKIE_NAME: str = "__session"


def get_firebase_project_id() -> str | None:
    """
    Explicit Firebase project from ``FIREBASE_PROJECT_ID``, or None.

    When unset the Admin SDK takes the project from its credential.
    """
    return os.getenv("FIREBASE_PROJECT_ID") or None


def get_functions_base_url() -> str:
    """Base URL for callable Cloud Functions (emulator or deployed)."""
    override = os.getenv("PR_FUNCTIONS_BASE_URL")
    if override:
        return override.rstrip("/")
    project = get_firebase_project_id() or DEFAULT_FUNCTIONS_PROJECT
    return f"https://{FIREBASE_FUNCTIONS_REGION}-{project}.cloudfunctions.net"


# --- Test email ---
TEST_EMAIL_FUNCTION: str = "sendTestEmail"
TEST_EMAIL_RECIPIENT: str = "procurement@1pwrafrica.com"
TEST_EMAIL_SUBJECT: str = "Test Email - PR System Notification"
TEST_EMAIL_MESSAGE: str = (
    "This is a test email to verify that the email notification system is working correctly."
)

# --- Auth ---
TOKEN_CACHE_MAX_SIZE: int = 1000
TOKEN_CACHE_TTL_SECONDS: int = 600
