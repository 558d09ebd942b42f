"""Display formatting utilities for ghi.

Pure functions (no I/O) for turning issue data into display strings.
"""

import re
from datetime import UTC, datetime, timedelta

from ghi.github.issues.types import Issue

_WHITESPACE_RUN = re.compile(r"\s+")

# Color per issue state, used for the number column and the view header
STATE_COLORS = {"OPEN": "green", "CLOSED": "red"}

TRUNCATION_MARKER = ", …"
AWAITING_TRIAGE = "Awaiting triage"


def pluralize(count: int, thing: str) -> str:
    """"1 comment", "2 comments"."""
    if count == 1:
        return f"{count} {thing}"
    return f"{count} {thing}s"


def fuzzy_ago(ago: timedelta) -> str:
    """Describe an elapsed duration the way humans read it ("about 2 hours ago")."""
    if ago < timedelta(minutes=1):
        return "less than a minute ago"
    if ago < timedelta(hours=1):
        return f"about {pluralize(int(ago.total_seconds() // 60), 'minute')} ago"
    if ago < timedelta(days=1):
        return f"about {pluralize(int(ago.total_seconds() // 3600), 'hour')} ago"
    if ago < timedelta(days=30):
        return f"about {pluralize(ago.days, 'day')} ago"
    if ago < timedelta(days=365):
        return f"about {pluralize(ago.days // 30, 'month')} ago"
    return f"about {pluralize(ago.days // 365, 'year')} ago"


def format_timestamp(value: datetime) -> str:
    """Absolute UTC timestamp for machine-readable output."""
    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def replace_excessive_whitespace(text: str) -> str:
    """Collapse runs of whitespace (including newlines and tabs) to one space."""
    return _WHITESPACE_RUN.sub(" ", text.strip())


def state_title(state: str) -> str:
    """"OPEN" -> "Open"."""
    return state.capitalize()


def _summary(names: list[str], total: int | None) -> str:
    if not names:
        return ""
    text = ", ".join(names)
    if total is not None and total > len(names):
        text += TRUNCATION_MARKER
    return text


def assignee_summary(issue: Issue) -> str:
    return _summary(issue.assignees, issue.assignees_total)


def label_summary(issue: Issue) -> str:
    return _summary(issue.labels, issue.labels_total)


def project_summary(issue: Issue) -> str:
    """Projects with their board column, e.g. "Roadmap (In progress)"."""
    names = [
        f"{card.project_name} ({card.column_name or AWAITING_TRIAGE})"
        for card in issue.project_cards
    ]
    return _summary(names, issue.project_cards_total)


def list_header(
    repo_name: str, item_name: str, match_count: int, total_count: int, has_filters: bool
) -> str:
    """Summary line shown above a list on a terminal."""
    if total_count == 0:
        if has_filters:
            return f"No {item_name}s match your search in {repo_name}"
        return f"There are no open {item_name}s in {repo_name}"

    if has_filters:
        match_verb = "matches" if total_count == 1 else "match"
        return (
            f"Showing {match_count} of {pluralize(total_count, item_name)} "
            f"in {repo_name} that {match_verb} your search"
        )

    return f"Showing {match_count} of {pluralize(total_count, f'open {item_name}')} in {repo_name}"
