"""PR System - notification formatting, Job Card handoff and admin helpers"""

from __future__ import annotations

__version__ = "1.0.0"


# Lazy imports so `import prsystem` does not pull in Firebase or FastAPI
def __getattr__(name: str):
    if name in ("generate_pr_link", "format_date", "format_amount", "format_reference_data"):
        from prsystem.notifications import formatters

        return getattr(formatters, name)

    if name == "map_to_user_reference":
        from prsystem.users.mapper import map_to_user_reference

        return map_to_user_reference

    if name in ("UserReference", "AuthenticatedUser"):
        from prsystem.users import models

        return getattr(models, name)

    if name in ("JobCardRedirect", "build_job_card_url"):
        from prsystem.redirect import job_card

        return getattr(job_card, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "generate_pr_link",
    "format_date",
    "format_amount",
    "format_reference_data",
    "map_to_user_reference",
    "UserReference",
    "AuthenticatedUser",
    "JobCardRedirect",
    "build_job_card_url",
]
