"""
Job Card handoff.

Email notification links land on ``/job-card``. Unauthenticated users are
sent through login first; once a user is known they are forwarded to the Job
Card system with their identity in the query string.

The controller is a two-state machine:

    WAITING --(non-empty user observed)--> REDIRECTED

The transition fires once. There is no timeout while waiting: the login
flow in front of this page guarantees a user eventually shows up or the
page is torn down.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol
from urllib.parse import quote, urlencode

from prsystem.auth.store import CurrentUserSource, Unsubscribe
from prsystem.config import JOB_CARD_URL
from prsystem.observability.logging import get_logger
from prsystem.observability.telemetry import log_event
from prsystem.users.models import AuthenticatedUser

logger = get_logger(__name__)


class RedirectState(str, Enum):
    WAITING = "waiting"
    REDIRECTED = "redirected"


class Navigator(Protocol):
    def replace(self, url: str) -> None:
        """Navigate to ``url`` without leaving the current page in history."""
        ...


def build_job_card_url(user: AuthenticatedUser, base_url: str = JOB_CARD_URL) -> str:
    """
    Job Card URL carrying the user's identity.

    The receiving system expects exactly these keys: uid, email, firstName,
    lastName, name. ``name`` is "first last", or the email when both are empty.
    """
    first_name = user.first_name or ""
    last_name = user.last_name or ""
    params = {
        "uid": user.id,
        "email": user.email,
        "firstName": first_name,
        "lastName": last_name,
        "name": f"{first_name} {last_name}".strip() or user.email,
    }
    return f"{base_url}?{urlencode(params, quote_via=quote)}"


class JobCardRedirect:
    """Forward the first authenticated user seen on ``source`` to the Job Card system."""

    def __init__(
        self,
        source: CurrentUserSource,
        navigator: Navigator,
        base_url: str = JOB_CARD_URL,
    ):
        self.source = source
        self.navigator = navigator
        self.base_url = base_url
        self.state = RedirectState.WAITING
        self.target: str | None = None
        self._unsubscribe: Unsubscribe | None = None

    def bind(self) -> Unsubscribe:
        """Start observing the source. Returns the teardown function."""
        self._unsubscribe = self.source.subscribe(self.on_user_changed)
        self.on_user_changed(self.source.user)
        return self.teardown

    def teardown(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def on_user_changed(self, user: AuthenticatedUser | None) -> str | None:
        """
        React to a user change; returns the navigation target once known.

        Repeat notifications after the redirect do not navigate again.
        """
        if user is None:
            return self.target

        if self.state is RedirectState.REDIRECTED:
            target = build_job_card_url(user, self.base_url)
            if target != self.target:
                logger.warning("Ignoring user change after Job Card redirect (uid=%s)", user.id)
            return self.target

        self.target = build_job_card_url(user, self.base_url)
        self.navigator.replace(self.target)
        self.state = RedirectState.REDIRECTED
        log_event("job_card.redirect", uid=user.id)
        return self.target

    @property
    def is_waiting(self) -> bool:
        return self.state is RedirectState.WAITING
