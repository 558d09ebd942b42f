"""Data types for the GitHub issues gateway."""

from dataclasses import dataclass, field
from datetime import datetime

TRIAGE_PERMISSIONS = frozenset({"ADMIN", "MAINTAIN", "WRITE", "TRIAGE"})


@dataclass(frozen=True)
class ProjectCard:
    """Placement of an issue on a project board.

    column_name is empty when the card has not been triaged into a column.
    """

    project_name: str
    column_name: str


@dataclass(frozen=True)
class Issue:
    """A GitHub issue as fetched from the API."""

    id: str
    number: int
    title: str
    body: str
    state: str  # "OPEN" or "CLOSED"
    url: str
    author: str
    created_at: datetime
    updated_at: datetime
    assignees: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    project_cards: list[ProjectCard] = field(default_factory=list)
    milestone: str | None = None
    comments_count: int = 0
    # Totals can exceed the fetched node lists on heavily labelled issues
    assignees_total: int | None = None
    labels_total: int | None = None
    project_cards_total: int | None = None

    @property
    def closed(self) -> bool:
        return self.state == "CLOSED"


@dataclass(frozen=True)
class IssueListResult:
    """A page of issues plus the number of issues matching on the server."""

    issues: list[Issue]
    total_count: int


@dataclass(frozen=True)
class IssueStatusResult:
    """Open issues relevant to the viewer."""

    assigned: IssueListResult
    mentioned: IssueListResult
    authored: IssueListResult


@dataclass(frozen=True)
class RepoInfo:
    """Repository facts needed before creating an issue."""

    id: str
    name_with_owner: str
    has_issues_enabled: bool
    viewer_permission: str

    @property
    def viewer_can_triage(self) -> bool:
        return self.viewer_permission in TRIAGE_PERMISSIONS


@dataclass(frozen=True)
class CreateIssueResult:
    """Result from creating a GitHub issue.

    Attributes:
        number: Issue number (e.g., 123)
        url: Full GitHub URL (e.g., https://github.com/owner/repo/issues/123)
    """

    number: int
    url: str


@dataclass(frozen=True)
class NamedNode:
    """A remote object addressable by a human-readable name."""

    name: str
    id: str


@dataclass(frozen=True)
class RepoMetadataInput:
    """Which metadata categories to fetch."""

    assignees: bool = False
    labels: bool = False
    projects: bool = False
    milestones: bool = False


@dataclass(frozen=True)
class IssueCreateParams:
    """Fully resolved payload for the create mutation.

    Only node ids appear here; names are resolved beforehand.
    """

    title: str
    body: str
    assignee_ids: list[str] = field(default_factory=list)
    label_ids: list[str] = field(default_factory=list)
    project_ids: list[str] = field(default_factory=list)
    milestone_id: str | None = None


class MetadataResolutionError(ValueError):
    """A metadata name did not match anything in the repository."""

    def __init__(self, category: str, value: str) -> None:
        self.category = category
        self.value = value
        super().__init__(f"could not add {category}: '{value}' not found")


@dataclass(frozen=True)
class RepoMetadata:
    """Assignable users, labels, projects and milestones of a repository.

    Categories that were not fetched are empty. Name matching is exact and
    case-sensitive.
    """

    assignable_users: list[NamedNode] = field(default_factory=list)
    labels: list[NamedNode] = field(default_factory=list)
    projects: list[NamedNode] = field(default_factory=list)
    milestones: list[NamedNode] = field(default_factory=list)

    def members_to_ids(self, logins: list[str]) -> list[str]:
        return _names_to_ids(self.assignable_users, logins, "assignee")

    def labels_to_ids(self, names: list[str]) -> list[str]:
        return _names_to_ids(self.labels, names, "label")

    def projects_to_ids(self, names: list[str]) -> list[str]:
        return _names_to_ids(self.projects, names, "project")

    def milestone_to_id(self, title: str) -> str:
        return _names_to_ids(self.milestones, [title], "milestone")[0]


def _names_to_ids(nodes: list[NamedNode], names: list[str], category: str) -> list[str]:
    by_name = {node.name: node.id for node in nodes}
    ids: list[str] = []
    for name in names:
        if name not in by_name:
            raise MetadataResolutionError(category, name)
        ids.append(by_name[name])
    return ids
