"""Resolution of issue metadata names to the node ids the create mutation needs."""

import logging
from dataclasses import dataclass, field
from enum import Enum

from ghi.github.issues.abc import GitHubIssues
from ghi.github.issues.types import IssueCreateParams, RepoMetadata
from ghi.github.repo import RepoRef

logger = logging.getLogger(__name__)


class Action(Enum):
    """What to do with a composed issue."""

    SUBMIT = "submit"
    PREVIEW = "preview"
    CANCEL = "cancel"


@dataclass
class MetadataState:
    """Title, body and metadata names collected for one `create` invocation.

    `metadata` holds the repository metadata fetched by the interactive
    survey, if it ran; it covers every category that has names here.
    """

    title: str = ""
    body: str = ""
    assignees: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    projects: list[str] = field(default_factory=list)
    milestones: list[str] = field(default_factory=list)
    action: Action = Action.SUBMIT
    metadata: RepoMetadata | None = None

    @property
    def has_metadata(self) -> bool:
        return bool(self.assignees or self.labels or self.projects or self.milestones)


def resolve_create_params(
    issues: GitHubIssues, repo: RepoRef, state: MetadataState
) -> IssueCreateParams:
    """Build the create payload, resolving every metadata name to its id.

    No lookups are made when no metadata was requested. Metadata fetched by
    the survey is reused; otherwise only the named objects are looked up.

    Raises:
        MetadataResolutionError: If any name does not exist in the repository
        RuntimeError: If a lookup fails
    """
    if not state.has_metadata:
        return IssueCreateParams(title=state.title, body=state.body)

    metadata = state.metadata
    if metadata is None:
        logger.debug(
            "Resolving metadata: assignees=%s labels=%s projects=%s milestones=%s",
            state.assignees,
            state.labels,
            state.projects,
            state.milestones,
        )
        metadata = issues.resolve_metadata(
            repo,
            assignees=state.assignees,
            labels=state.labels,
            projects=state.projects,
            milestones=state.milestones[:1],
        )

    milestone_id = None
    if state.milestones:
        milestone_id = metadata.milestone_to_id(state.milestones[0])

    return IssueCreateParams(
        title=state.title,
        body=state.body,
        assignee_ids=metadata.members_to_ids(state.assignees),
        label_ids=metadata.labels_to_ids(state.labels),
        project_ids=metadata.projects_to_ids(state.projects),
        milestone_id=milestone_id,
    )
