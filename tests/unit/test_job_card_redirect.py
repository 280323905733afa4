"""Tests for the Job Card redirect controller"""

from __future__ import annotations

from prsystem.auth.store import AuthStateStore
from prsystem.redirect.job_card import JobCardRedirect, RedirectState, build_job_card_url
from prsystem.users.models import AuthenticatedUser


class RecordingNavigator:
    def __init__(self):
        self.calls: list[str] = []

    def replace(self, url: str) -> None:
        self.calls.append(url)


# ============================================================================
# URL building
# ============================================================================


def test_build_url_with_full_name():
    user = AuthenticatedUser(id="u1", email="a@b.com", first_name="A", last_name="B")

    assert build_job_card_url(user) == (
        "https://prod.1pwrafrica.com?uid=u1&email=a%40b.com&firstName=A&lastName=B&name=A%20B"
    )


def test_build_url_name_falls_back_to_email():
    user = AuthenticatedUser(id="u2", email="x@y.com")

    assert build_job_card_url(user) == (
        "https://prod.1pwrafrica.com?uid=u2&email=x%40y.com&firstName=&lastName=&name=x%40y.com"
    )


def test_build_url_single_name_is_trimmed():
    user = AuthenticatedUser(id="u3", email="z@y.com", first_name="Lerato")

    assert build_job_card_url(user).endswith("firstName=Lerato&lastName=&name=Lerato")


# ============================================================================
# State machine
# ============================================================================


def test_waits_without_user():
    navigator = RecordingNavigator()
    controller = JobCardRedirect(AuthStateStore(), navigator)

    controller.bind()

    assert controller.state is RedirectState.WAITING
    assert controller.is_waiting
    assert navigator.calls == []


def test_redirects_when_user_already_present(procurement_user):
    navigator = RecordingNavigator()
    controller = JobCardRedirect(AuthStateStore(procurement_user), navigator)

    controller.bind()

    assert controller.state is RedirectState.REDIRECTED
    assert navigator.calls == [build_job_card_url(procurement_user)]


def test_redirects_when_user_arrives_later(procurement_user):
    store = AuthStateStore()
    navigator = RecordingNavigator()
    controller = JobCardRedirect(store, navigator)
    controller.bind()

    store.set_user(procurement_user)

    assert controller.state is RedirectState.REDIRECTED
    assert navigator.calls == [build_job_card_url(procurement_user)]


def test_repeated_user_does_not_navigate_twice(procurement_user):
    store = AuthStateStore()
    navigator = RecordingNavigator()
    controller = JobCardRedirect(store, navigator)
    controller.bind()

    store.set_user(procurement_user)
    first = controller.target
    second = controller.on_user_changed(procurement_user)

    assert second == first
    assert len(navigator.calls) == 1


def test_teardown_before_login_never_navigates(procurement_user):
    store = AuthStateStore()
    navigator = RecordingNavigator()
    controller = JobCardRedirect(store, navigator)

    teardown = controller.bind()
    teardown()
    store.set_user(procurement_user)

    assert controller.state is RedirectState.WAITING
    assert navigator.calls == []


def test_custom_base_url(procurement_user):
    navigator = RecordingNavigator()
    controller = JobCardRedirect(
        AuthStateStore(procurement_user), navigator, base_url="https://jobs.example.com"
    )

    controller.bind()

    assert navigator.calls[0].startswith("https://jobs.example.com?uid=u1&")
