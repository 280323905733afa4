"""
Error message sanitization.

Messages that leave the service go through here so stack traces, file paths,
tokens and Firebase internals never reach a client.
"""

from __future__ import annotations

import re

from prsystem.observability.logging import get_logger

logger = get_logger(__name__)

SENSITIVE_PATTERNS = [
    # File paths
    r"/[^\s]+\.py",
    r"[A-Za-z]:\\[^\s]+",
    # Stack trace indicators
    r"Traceback \(most recent call last\)",
    r"File \".*\"",
    r"line \d+",
    # Credentials
    r"[A-Za-z0-9_-]{20,}",  # long opaque strings (keys, tokens, uids)
    r"Bearer [A-Za-z0-9._-]+",
    r"private_key",
    r"service[_ -]account",
    # Internal module names
    r"prsystem\.[a-z_.]+",
    r"firebase_admin\.[a-z_.]+",
    r"google\.(api_core|cloud|auth)",
]

GENERIC_MESSAGES = {
    400: "Invalid request. Please check your input and try again.",
    401: "Authentication required.",
    403: "Access denied.",
    404: "Resource not found.",
    422: "Invalid data format.",
    500: "An internal error occurred. Please try again later.",
    502: "The backend service failed. Please try again later.",
    503: "Service temporarily unavailable.",
}

# Statuses whose short, clean messages are useful to show as-is
_PASSTHROUGH_STATUSES = {400, 502}


def sanitize_error_message(message: str, status_code: int = 500) -> str:
    """
    Return ``message`` if it is safe to show, else a generic message for ``status_code``.
    """
    generic = GENERIC_MESSAGES.get(status_code, "An error occurred.")
    if not message:
        return generic

    for pattern in SENSITIVE_PATTERNS:
        if re.search(pattern, message, re.IGNORECASE):
            logger.warning("Sanitized sensitive error pattern: %s", pattern)
            return generic

    if (
        status_code in _PASSTHROUGH_STATUSES
        and len(message) < 100
        and not any(c in message for c in ["{", "}", "[", "]", "\n"])
    ):
        return message

    return generic
