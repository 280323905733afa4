"""Pydantic models for users as the PR System sees them.

Firestore documents use camelCase field names, so every model accepts both
the camelCase alias and the Python attribute name.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class UserPermissions(_CamelModel):
    """Capability flags stored on the user document."""

    can_create_pr: bool = Field(default=False, alias="canCreatePR")
    can_approve_pr: bool = Field(default=False, alias="canApprovePR")
    can_process_pr: bool = Field(default=False, alias="canProcessPR")
    can_manage_users: bool = Field(default=False, alias="canManageUsers")
    can_view_reports: bool = Field(default=False, alias="canViewReports")


class AuthenticatedUser(_CamelModel):
    """
    The signed-in user, read from the identity store and ``users/{uid}``.

    This service only reads it; the session store owns its lifecycle.
    """

    id: str
    email: str = ""
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    role: str | None = None
    organization: str | None = None
    is_active: bool = Field(default=True, alias="isActive")
    permission_level: int | None = Field(default=None, alias="permissionLevel")
    additional_organizations: list[str] = Field(
        default_factory=list, alias="additionalOrganizations"
    )
    permissions: UserPermissions = Field(default_factory=UserPermissions)

    def __str__(self) -> str:
        return f"User({self.id}, {self.email})"


class UserReference(_CamelModel):
    """Canonical user reference embedded in PR records."""

    id: str = ""
    name: str
    email: str = ""
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
