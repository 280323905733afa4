"""
Observable holder for the current authenticated user.

Consumers (the Job Card redirect, the debug panels) depend on the
``CurrentUserSource`` protocol rather than a concrete global, so tests and
request handlers can hand them their own ``AuthStateStore``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from prsystem.observability.logging import get_logger
from prsystem.users.models import AuthenticatedUser

logger = get_logger(__name__)

UserListener = Callable[[AuthenticatedUser | None], None]
Unsubscribe = Callable[[], None]


class CurrentUserSource(Protocol):
    """Read-only view of the session: the current user, if any."""

    @property
    def user(self) -> AuthenticatedUser | None: ...

    def subscribe(self, listener: UserListener) -> Unsubscribe: ...


class AuthStateStore:
    """In-memory auth state with change notification."""

    def __init__(self, user: AuthenticatedUser | None = None):
        self._user = user
        self._listeners: list[UserListener] = []

    @property
    def user(self) -> AuthenticatedUser | None:
        return self._user

    def subscribe(self, listener: UserListener) -> Unsubscribe:
        """Register ``listener`` for user changes. Returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_user(self, user: AuthenticatedUser | None) -> None:
        self._user = user
        self._notify()

    def clear_user(self) -> None:
        logger.debug("Clearing auth state")
        self.set_user(None)

    def _notify(self) -> None:
        # Copy: listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(self._user)
