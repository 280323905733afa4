"""
Map identity-provider user objects onto ``UserReference``.

The input shape is not guaranteed. Plain mappings with Firebase client keys
(``uid``, ``displayName``, ``email``) and ``firebase_admin.auth.UserRecord``
style objects (``uid``, ``display_name``, ``email``) are both accepted, and
every output field has a fallback, so mapping never fails.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from prsystem.config import UNKNOWN_USER
from prsystem.users.models import UserReference


def _field(source: Any, *names: str) -> str:
    """First non-empty string value found under any of ``names``."""
    if source is None:
        return ""

    for name in names:
        if isinstance(source, Mapping):
            value = source.get(name)
        else:
            value = getattr(source, name, None)
        if value:
            return str(value)
    return ""


def map_to_user_reference(external_user: Any) -> UserReference:
    """
    Build a ``UserReference`` from an external user object.

    Name resolution: display name, then email, then ``"Unknown User"``.
    First/last name come from splitting the display name on whitespace:
    the first token, and the remaining tokens joined by single spaces.
    """
    uid = _field(external_user, "uid", "id")
    display_name = _field(external_user, "displayName", "display_name")
    email = _field(external_user, "email")

    tokens = display_name.split()

    return UserReference(
        id=uid,
        name=display_name or email or UNKNOWN_USER,
        email=email,
        first_name=tokens[0] if tokens else "",
        last_name=" ".join(tokens[1:]),
    )
