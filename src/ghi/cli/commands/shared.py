"""Helpers shared by the issue commands."""

from ghi.cli.output import user_output
from ghi.cli.parse_issue_reference import parse_issue_reference
from ghi.core.context import GhiContext
from ghi.github.issues.types import Issue
from ghi.github.repo import RepoRef
from ghi.github.urls import display_url


def split_values(values: tuple[str, ...]) -> list[str]:
    """Flatten repeated and comma-separated option values ("a,b" -c -> [a, b, c])."""
    result: list[str] = []
    for value in values:
        result.extend(part.strip() for part in value.split(",") if part.strip())
    return result


def open_in_browser(ctx: GhiContext, url: str) -> None:
    """Announce and open `url`.

    Raises:
        RuntimeError: If the browser could not be launched
    """
    user_output(f"Opening {display_url(url)} in your browser.")
    ctx.browser.open(url)


def issue_from_argument(ctx: GhiContext, argument: str) -> tuple[Issue, RepoRef]:
    """Fetch the issue named by a number, "#number" or issue URL.

    A URL selects its own repository; otherwise the base repository is used.

    Raises:
        SystemExit: If the argument is not an issue reference
        RuntimeError: If the issue cannot be fetched
        ValueError: If the base repository cannot be determined
    """
    reference = parse_issue_reference(argument)
    repo = reference.repo if reference.repo is not None else ctx.base_repo()
    return ctx.issues.get_issue(repo, reference.number), repo
