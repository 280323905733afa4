"""Permission levels used across the PR System.

Lower numbers are broader roles. Procurement staff are the senior approver
and procurement officer levels.
"""

from __future__ import annotations

from enum import IntEnum


class PermissionLevel(IntEnum):
    ADMIN = 1
    APPROVER = 2
    PROC = 3
    FIN_AD = 4
    REQ = 5
    FIN_APPROVER = 6
    SITE_MANAGER = 7
    USER_ADMIN = 8


PERMISSION_NAMES: dict[int, str] = {
    PermissionLevel.ADMIN: "Administrator",
    PermissionLevel.APPROVER: "Senior Approver",
    PermissionLevel.PROC: "Procurement Officer",
    PermissionLevel.FIN_AD: "Finance Admin",
    PermissionLevel.REQ: "Requester",
    PermissionLevel.FIN_APPROVER: "Finance Approver",
    PermissionLevel.SITE_MANAGER: "Site Manager",
    PermissionLevel.USER_ADMIN: "User Administrator",
}

PROCUREMENT_LEVELS: frozenset[int] = frozenset({PermissionLevel.APPROVER, PermissionLevel.PROC})


def get_permission_name(level: int | None) -> str:
    """Display name for a permission level; ``"Unknown"`` when unset or unrecognised."""
    if not level:
        return "Unknown"
    return PERMISSION_NAMES.get(level, "Unknown")


def is_procurement_level(level: int | None) -> bool:
    return level in PROCUREMENT_LEVELS
