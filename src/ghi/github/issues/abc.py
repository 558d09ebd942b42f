"""Abstract interface for GitHub issue operations."""

from abc import ABC, abstractmethod

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


class GitHubIssues(ABC):
    """Abstract interface for GitHub issue operations.

    All implementations (real and fake) must implement this interface.
    Failures of the remote service surface as RuntimeError carrying the
    service's message.
    """

    @abstractmethod
    def get_repo(self, repo: RepoRef) -> RepoInfo:
        """Fetch the repository id, whether issues are enabled and the viewer's permission.

        Raises:
            RuntimeError: If the repository cannot be fetched
        """
        ...

    @abstractmethod
    def list_issues(self, repo: RepoRef, filters: FilterOptions, limit: int) -> IssueListResult:
        """List issues matching `filters`, most recently created first.

        Args:
            repo: Target repository
            filters: State, assignee, labels (all must match), author, mention
                and milestone title filters
            limit: Maximum number of issues to return

        Returns:
            IssueListResult with at most `limit` issues and the total match count

        Raises:
            RuntimeError: If the query fails, the milestone does not exist, or
                the repository has issues disabled
        """
        ...

    @abstractmethod
    def get_issue_status(self, repo: RepoRef, login: str) -> IssueStatusResult:
        """Fetch open issues assigned to, mentioning, or opened by `login`.

        Raises:
            RuntimeError: If the query fails
        """
        ...

    @abstractmethod
    def get_issue(self, repo: RepoRef, number: int) -> Issue:
        """Fetch a single issue by number.

        Raises:
            RuntimeError: If the issue does not exist or issues are disabled
        """
        ...

    @abstractmethod
    def create_issue(
        self, repo: RepoRef, repo_id: str, params: IssueCreateParams
    ) -> CreateIssueResult:
        """Create an issue from a fully resolved payload.

        Args:
            repo: Target repository
            repo_id: Repository node id (from get_repo)
            params: Title, body and metadata node ids

        Raises:
            RuntimeError: If the mutation fails
        """
        ...

    @abstractmethod
    def close_issue(self, repo: RepoRef, issue: Issue) -> None:
        """Close an issue.

        Raises:
            RuntimeError: If the mutation fails
        """
        ...

    @abstractmethod
    def reopen_issue(self, repo: RepoRef, issue: Issue) -> None:
        """Reopen a closed issue.

        Raises:
            RuntimeError: If the mutation fails
        """
        ...

    @abstractmethod
    def get_current_username(self, host: str) -> str | None:
        """Get the login of the authenticated user on `host`.

        Returns:
            GitHub username if authenticated, None if not authenticated
        """
        ...

    @abstractmethod
    def fetch_repo_metadata(self, repo: RepoRef, wanted: RepoMetadataInput) -> RepoMetadata:
        """Fetch the full set of options for the requested metadata categories.

        Used by the interactive survey to offer choices.

        Raises:
            RuntimeError: If any lookup fails
        """
        ...

    @abstractmethod
    def resolve_metadata(
        self,
        repo: RepoRef,
        *,
        assignees: list[str],
        labels: list[str],
        projects: list[str],
        milestones: list[str],
    ) -> RepoMetadata:
        """Look up just enough metadata to map the given names to node ids.

        Names that do not exist are simply absent from the result; the caller
        reports them.

        Raises:
            RuntimeError: If any lookup fails
        """
        ...
