"""
Formatting helpers for PR notification emails.

Every function here is total: missing or falsy input renders as
``"Not specified"`` instead of raising.

Examples:
    >>> generate_pr_link("PR-2024-001")
    'https://pr.1pwrafrica.com/pr/PR-2024-001'

    >>> format_amount(0, "USD")
    'Not specified'

    >>> format_reference_data("7_administrative_overhead")
    '7 Administrative Overhead'
"""

from __future__ import annotations

from datetime import date, datetime

from babel.dates import format_date as babel_format_date
from babel.numbers import format_currency
from dateutil import parser as date_parser

from prsystem.config import DEFAULT_CURRENCY, DISPLAY_LOCALE, NOT_SPECIFIED, get_pr_system_url
from prsystem.observability.logging import get_logger

logger = get_logger(__name__)


def generate_pr_link(pr_id: str) -> str:
    """Deep link to a PR. Always built on the production PR System URL."""
    return f"{get_pr_system_url()}/pr/{pr_id}"


# Parsing against two different fill-in dates exposes any missing year, month or day
_FILL_FIRST = datetime(2000, 1, 1)
_FILL_SECOND = datetime(2001, 2, 2)


def _parse_full_date(value: str) -> datetime:
    parsed = date_parser.parse(value, default=_FILL_FIRST)
    if parsed.date() != date_parser.parse(value, default=_FILL_SECOND).date():
        raise ValueError(f"incomplete date: {value!r}")
    return parsed


def format_date(value: str | date | datetime | None) -> str:
    """
    Format a date as a long US-English string, e.g. ``January 5, 2024``.

    Strings are parsed with dateutil and must name a year, month and day.
    Anything else is returned unchanged so the email still carries whatever
    the record held.
    """
    if not value:
        return NOT_SPECIFIED

    if isinstance(value, str):
        try:
            value = _parse_full_date(value)
        except (ValueError, OverflowError):
            logger.warning("Unparseable date value: %r", value)
            return value

    return babel_format_date(value, format="long", locale=DISPLAY_LOCALE)


def format_amount(amount: float | int | None, currency: str | None) -> str:
    """
    Format an amount as currency, e.g. ``$1,234.50``.

    A zero amount is treated like a missing one and renders as
    ``"Not specified"``.
    """
    if not amount:
        return NOT_SPECIFIED
    return format_currency(amount, (currency or DEFAULT_CURRENCY).upper(), locale=DISPLAY_LOCALE)


def format_reference_data(value: str | None) -> str:
    """Turn an underscore code such as ``department_name`` into ``Department Name``."""
    if not value:
        return NOT_SPECIFIED

    if "_" in value:
        return " ".join(word[:1].upper() + word[1:] for word in value.split("_"))

    return value
