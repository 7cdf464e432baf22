from __future__ import annotations

from typing import Any, Iterable

from .types import LinkResult, LinkStatus, Outcome

ERRORS_HEADER = "Some errors occurred:"
NOT_INSTALLED_HEADER = "The following programs are not installed on this system:"


def summarize(outcomes: Iterable[Outcome[Any]]) -> str | None:
    """One line per failed outcome, or None when everything succeeded."""
    lines = [outcome.message for outcome in outcomes if not outcome.ok]
    if not lines:
        return None
    return "\n".join(lines)


def not_installed(outcomes: Iterable[Outcome[LinkResult]]) -> str | None:
    names = [
        outcome.value.name
        for outcome in outcomes
        if outcome.ok
        and outcome.value is not None
        and outcome.value.status is LinkStatus.LINKED
        and not outcome.value.installed
    ]
    if not names:
        return None
    return "\n".join(names)
