"""In-memory fake implementation of GitHub issues for testing."""

from dataclasses import replace
from datetime import UTC, datetime

from ghi.github.issues.abc import GitHubIssues
from ghi.github.issues.types import (
    CreateIssueResult,
    Issue,
    IssueCreateParams,
    IssueListResult,
    IssueStatusResult,
    RepoInfo,
    RepoMetadata,
    RepoMetadataInput,
)
from ghi.github.repo import RepoRef
from ghi.github.urls import FilterOptions

STATUS_PAGE_SIZE = 10


class FakeGitHubIssues(GitHubIssues):
    """In-memory fake implementation for testing.

    All state is provided via constructor using keyword arguments.
    The fake models a single repository; repo arguments are recorded but
    not used for lookup.
    """

    def __init__(
        self,
        *,
        issues: dict[int, Issue] | None = None,
        next_issue_number: int = 1,
        repo_info: RepoInfo | None = None,
        metadata: RepoMetadata | None = None,
        username: str | None = "testuser",
    ) -> None:
        """Create FakeGitHubIssues with pre-configured state.

        Args:
            issues: Mapping of issue number -> Issue
            next_issue_number: Next issue number to assign (for predictable testing)
            repo_info: Repository facts returned by get_repo (default: issues
                enabled, viewer has WRITE permission)
            metadata: Every assignable user, label, project and milestone in
                the repository
            username: GitHub username to return (default: "testuser", None means
                not authenticated)
        """
        self._issues = issues or {}
        self._next_issue_number = next_issue_number
        self._repo_info = repo_info or RepoInfo(
            id="R_test",
            name_with_owner="test-owner/test-repo",
            has_issues_enabled=True,
            viewer_permission="WRITE",
        )
        self._metadata = metadata or RepoMetadata()
        self._username = username
        self._created_issues: list[IssueCreateParams] = []
        self._closed_issues: list[int] = []
        self._reopened_issues: list[int] = []
        self._metadata_fetches: list[RepoMetadataInput] = []
        self._resolved_names: list[dict[str, list[str]]] = []
        self._list_calls: list[tuple[RepoRef, FilterOptions, int]] = []
        self._repo_lookups: list[RepoRef] = []

    @property
    def created_issues(self) -> list[IssueCreateParams]:
        """Read-only access to create payloads for test assertions."""
        return self._created_issues

    @property
    def closed_issues(self) -> list[int]:
        """Issue numbers passed to close_issue."""
        return self._closed_issues

    @property
    def reopened_issues(self) -> list[int]:
        """Issue numbers passed to reopen_issue."""
        return self._reopened_issues

    @property
    def metadata_fetches(self) -> list[RepoMetadataInput]:
        """Categories requested through fetch_repo_metadata."""
        return self._metadata_fetches

    @property
    def resolved_names(self) -> list[dict[str, list[str]]]:
        """Name lists passed to resolve_metadata."""
        return self._resolved_names

    @property
    def list_calls(self) -> list[tuple[RepoRef, FilterOptions, int]]:
        """(repo, filters, limit) for each list_issues call."""
        return self._list_calls

    @property
    def repo_lookups(self) -> list[RepoRef]:
        """Repositories passed to get_repo."""
        return self._repo_lookups

    @property
    def mutation_count(self) -> int:
        """Number of remote state changes performed."""
        return len(self._created_issues) + len(self._closed_issues) + len(self._reopened_issues)

    def get_repo(self, repo: RepoRef) -> RepoInfo:
        self._repo_lookups.append(repo)
        return self._repo_info

    def _check_issues_enabled(self, repo: RepoRef) -> None:
        if not self._repo_info.has_issues_enabled:
            msg = f"the '{repo.full_name}' repository has disabled issues"
            raise RuntimeError(msg)

    def list_issues(self, repo: RepoRef, filters: FilterOptions, limit: int) -> IssueListResult:
        """Filter stored issues the way the issues connection does.

        Labels use AND logic; mention matches an @login in the body.
        """
        self._list_calls.append((repo, filters, limit))
        self._check_issues_enabled(repo)

        issues = sorted(self._issues.values(), key=lambda i: i.created_at, reverse=True)
        if filters.state != "all":
            issues = [i for i in issues if i.state == filters.state.upper()]
        if filters.labels:
            wanted = set(filters.labels)
            issues = [i for i in issues if wanted.issubset(set(i.labels))]
        if filters.assignee:
            issues = [i for i in issues if filters.assignee in i.assignees]
        if filters.author:
            issues = [i for i in issues if i.author == filters.author]
        if filters.mention:
            issues = [i for i in issues if f"@{filters.mention}" in i.body]
        if filters.milestone:
            issues = [i for i in issues if i.milestone == filters.milestone]

        return IssueListResult(issues=issues[:limit], total_count=len(issues))

    def get_issue_status(self, repo: RepoRef, login: str) -> IssueStatusResult:
        self._check_issues_enabled(repo)
        open_issues = sorted(
            (i for i in self._issues.values() if i.state == "OPEN"),
            key=lambda i: i.updated_at,
            reverse=True,
        )

        def section(matching: list[Issue]) -> IssueListResult:
            return IssueListResult(issues=matching[:STATUS_PAGE_SIZE], total_count=len(matching))

        return IssueStatusResult(
            assigned=section([i for i in open_issues if login in i.assignees]),
            mentioned=section([i for i in open_issues if f"@{login}" in i.body]),
            authored=section([i for i in open_issues if i.author == login]),
        )

    def get_issue(self, repo: RepoRef, number: int) -> Issue:
        """Get issue from fake storage.

        Raises:
            RuntimeError: If issue number not found (simulates API error)
        """
        self._check_issues_enabled(repo)
        if number not in self._issues:
            msg = f"Could not resolve to an Issue with the number of {number}."
            raise RuntimeError(msg)
        return self._issues[number]

    def create_issue(
        self, repo: RepoRef, repo_id: str, params: IssueCreateParams
    ) -> CreateIssueResult:
        """Create issue in fake storage and track mutation."""
        issue_number = self._next_issue_number
        self._next_issue_number += 1

        url = f"https://{repo.host}/{repo.owner}/{repo.name}/issues/{issue_number}"
        now = datetime.now(UTC)
        self._issues[issue_number] = Issue(
            id=f"I_{issue_number}",
            number=issue_number,
            title=params.title,
            body=params.body,
            state="OPEN",
            url=url,
            author=self._username or "ghost",
            created_at=now,
            updated_at=now,
        )
        self._created_issues.append(params)
        return CreateIssueResult(number=issue_number, url=url)

    def close_issue(self, repo: RepoRef, issue: Issue) -> None:
        """Close issue in fake storage.

        Raises:
            RuntimeError: If issue number not found (simulates API error)
        """
        if issue.number not in self._issues:
            msg = f"Could not resolve to an Issue with the number of {issue.number}."
            raise RuntimeError(msg)
        self._issues[issue.number] = replace(self._issues[issue.number], state="CLOSED")
        self._closed_issues.append(issue.number)

    def reopen_issue(self, repo: RepoRef, issue: Issue) -> None:
        """Reopen issue in fake storage.

        Raises:
            RuntimeError: If issue number not found (simulates API error)
        """
        if issue.number not in self._issues:
            msg = f"Could not resolve to an Issue with the number of {issue.number}."
            raise RuntimeError(msg)
        self._issues[issue.number] = replace(self._issues[issue.number], state="OPEN")
        self._reopened_issues.append(issue.number)

    def get_current_username(self, host: str) -> str | None:
        """Return configured username from constructor."""
        return self._username

    def fetch_repo_metadata(self, repo: RepoRef, wanted: RepoMetadataInput) -> RepoMetadata:
        self._metadata_fetches.append(wanted)
        return RepoMetadata(
            assignable_users=self._metadata.assignable_users if wanted.assignees else [],
            labels=self._metadata.labels if wanted.labels else [],
            projects=self._metadata.projects if wanted.projects else [],
            milestones=self._metadata.milestones if wanted.milestones else [],
        )

    def resolve_metadata(
        self,
        repo: RepoRef,
        *,
        assignees: list[str],
        labels: list[str],
        projects: list[str],
        milestones: list[str],
    ) -> RepoMetadata:
        """Return only the stored nodes whose names were asked for."""
        self._resolved_names.append(
            {
                "assignees": assignees,
                "labels": labels,
                "projects": projects,
                "milestones": milestones,
            }
        )
        return RepoMetadata(
            assignable_users=[n for n in self._metadata.assignable_users if n.name in assignees],
            labels=[n for n in self._metadata.labels if n.name in labels],
            projects=[n for n in self._metadata.projects if n.name in projects],
            milestones=[n for n in self._metadata.milestones if n.name in milestones],
        )
