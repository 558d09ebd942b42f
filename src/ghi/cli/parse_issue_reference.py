"""Parse issue reference from user input."""

import re
from dataclasses import dataclass

import click

from ghi.cli.output import user_output
from ghi.github.repo import RepoRef

_NUMBER_PATTERN = re.compile(r"^#?(\d+)$")

# https://<host>/OWNER/REPO/issues/123, optionally with a trailing path, query or fragment
_URL_PATTERN = re.compile(
    r"^https?://(?P<host>[^/]+)/(?P<owner>[^/]+)/(?P<repo>[^/]+)/issues/(?P<number>\d+)"
    r"(?:/.*)?(?:[?#].*)?$"
)


@dataclass(frozen=True)
class IssueReference:
    """An issue number, plus the repository when given as a URL."""

    number: int
    repo: RepoRef | None = None


def parse_issue_reference(reference: str) -> IssueReference:
    """Parse issue number from a plain number, "#number", or GitHub issue URL.

    Accepts:
      - Plain number: "123"
      - Hash-prefixed number: "#123"
      - GitHub URL: "https://github.com/owner/repo/issues/123"

    Raises:
        SystemExit: If input format is invalid or number is not positive

    Examples:
        >>> parse_issue_reference("#123").number
        123
        >>> parse_issue_reference("https://github.com/owner/repo/issues/456").repo.full_name
        'owner/repo'
    """
    number_match = _NUMBER_PATTERN.match(reference.strip())
    url_match = _URL_PATTERN.match(reference.strip())

    if number_match is not None:
        ref = IssueReference(number=int(number_match.group(1)))
    elif url_match is not None:
        ref = IssueReference(
            number=int(url_match.group("number")),
            repo=RepoRef(
                owner=url_match.group("owner"),
                name=url_match.group("repo"),
                host=url_match.group("host").lower(),
            ),
        )
    else:
        user_output(
            click.style("Error: ", fg="red")
            + f"Invalid issue number or URL: {reference}\n\n"
            + "Expected formats:\n"
            + "  • Plain number: 123 or #123\n"
            + "  • GitHub URL: https://github.com/owner/repo/issues/456"
        )
        raise SystemExit(1)

    if ref.number <= 0:
        user_output(
            click.style("Error: ", fg="red")
            + f"Invalid issue number: {ref.number}\n\n"
            + "Issue number must be a positive integer"
        )
        raise SystemExit(1)

    return ref
