"""GitHub issues integration."""

from ghi.github.issues.abc import GitHubIssues
from ghi.github.issues.fake import FakeGitHubIssues
from ghi.github.issues.real import RealGitHubIssues
from ghi.github.issues.types import (
    CreateIssueResult,
    Issue,
    IssueCreateParams,
    IssueListResult,
    IssueStatusResult,
    MetadataResolutionError,
    NamedNode,
    ProjectCard,
    RepoInfo,
    RepoMetadata,
    RepoMetadataInput,
)

__all__ = [
    "CreateIssueResult",
    "FakeGitHubIssues",
    "GitHubIssues",
    "Issue",
    "IssueCreateParams",
    "IssueListResult",
    "IssueStatusResult",
    "MetadataResolutionError",
    "NamedNode",
    "ProjectCard",
    "RealGitHubIssues",
    "RepoInfo",
    "RepoMetadata",
    "RepoMetadataInput",
]
