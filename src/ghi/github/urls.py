"""Browser hand-off URLs for issue lists and the new-issue form."""

from dataclasses import dataclass, field
from urllib.parse import urlencode, urlparse


@dataclass(frozen=True)
class FilterOptions:
    """Filters for listing issues.

    Empty values mean "not filtered". `state` is one of "open", "closed", "all".
    """

    state: str = "open"
    assignee: str = ""
    labels: list[str] = field(default_factory=list)
    author: str = ""
    mention: str = ""
    milestone: str = ""


def _quote_value_for_query(value: str) -> str:
    if any(ch in value for ch in ' "\t\r\n'):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return value


def build_search_query(options: FilterOptions) -> str:
    """Build the search qualifier string for the web issue list.

    Only filters that are set produce a qualifier.
    """
    terms = ["is:issue"]
    if options.state != "all":
        terms.append(f"is:{options.state}")
    if options.assignee:
        terms.append(f"assignee:{options.assignee}")
    for label in options.labels:
        terms.append(f"label:{_quote_value_for_query(label)}")
    if options.author:
        terms.append(f"author:{options.author}")
    if options.mention:
        terms.append(f"mentions:{options.mention}")
    if options.milestone:
        terms.append(f"milestone:{_quote_value_for_query(options.milestone)}")
    return " ".join(terms)


def list_url_with_query(list_url: str, options: FilterOptions) -> str:
    """Append the search query for `options` to an issues list URL."""
    return f"{list_url}?{urlencode({'q': build_search_query(options)})}"


def with_issue_query_params(
    base_url: str,
    *,
    title: str,
    body: str,
    assignees: list[str],
    labels: list[str],
    projects: list[str],
    milestones: list[str],
) -> str:
    """Pre-fill the web new-issue form through query parameters.

    Each parameter is present only when its value is non-empty. Keys are
    emitted in sorted order so the URL is deterministic.
    """
    params: dict[str, str] = {}
    if title:
        params["title"] = title
    if body:
        params["body"] = body
    if assignees:
        params["assignees"] = ",".join(assignees)
    if labels:
        params["labels"] = ",".join(labels)
    if projects:
        params["projects"] = ",".join(projects)
    if milestones:
        params["milestone"] = milestones[0]

    if not params:
        return base_url
    return f"{base_url}?{urlencode(sorted(params.items()))}"


def display_url(url: str) -> str:
    """Shorten a URL for messages: host and path, no scheme or query."""
    parsed = urlparse(url)
    if not parsed.hostname:
        return url
    return f"{parsed.hostname}{parsed.path}"
