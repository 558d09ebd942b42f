"""Interactive survey for composing an issue.

Collects the title, the body (in the user's editor, seeded from an issue
template) and optional metadata, then asks what to do with the result.
Only used when stdin and stdout are terminals.
"""

import logging
from enum import Enum

import click

from ghi.cli.output import user_output
from ghi.core.prompter.abc import Prompter
from ghi.github.issues.abc import GitHubIssues
from ghi.github.issues.types import RepoMetadataInput
from ghi.github.metadata import Action, MetadataState
from ghi.github.repo import RepoRef
from ghi.github.templates import IssueTemplates, extract_contents, extract_name

logger = logging.getLogger(__name__)

BLANK_TEMPLATE = "Open a blank issue"
NO_MILESTONE = "(none)"

METADATA_ASSIGNEES = "Assignees"
METADATA_LABELS = "Labels"
METADATA_PROJECTS = "Projects"
METADATA_MILESTONE = "Milestone"
METADATA_CATEGORIES = [METADATA_ASSIGNEES, METADATA_LABELS, METADATA_PROJECTS, METADATA_MILESTONE]


class ConfirmChoice(Enum):
    """Answers to "What's next?"."""

    SUBMIT = "Submit"
    PREVIEW = "Continue in browser"
    METADATA = "Add metadata"
    CANCEL = "Cancel"


def _warn(message: str) -> None:
    user_output(click.style("warning: ", fg="yellow") + message)


def select_template(prompter: Prompter, templates: IssueTemplates) -> str:
    """Ask which template to start from and return its body.

    The last option opens a blank issue, which falls back to the legacy
    template when one exists.
    """
    names = [extract_name(path) for path in templates.non_legacy]
    options = [*names, BLANK_TEMPLATE]
    choice = prompter.select("Choose a template", options)
    index = options.index(choice)

    if index == len(templates.non_legacy):
        if templates.legacy is not None:
            return extract_contents(templates.legacy)
        return ""
    return extract_contents(templates.non_legacy[index])


def _template_body(prompter: Prompter, templates: IssueTemplates) -> str:
    if templates.non_legacy:
        return select_template(prompter, templates)
    if templates.legacy is not None:
        return extract_contents(templates.legacy)
    return ""


def confirm_submission(
    prompter: Prompter, *, allow_preview: bool, allow_metadata: bool
) -> ConfirmChoice:
    """Ask what to do next; offers only the choices valid right now."""
    choices = [ConfirmChoice.SUBMIT]
    if allow_preview:
        choices.append(ConfirmChoice.PREVIEW)
    if allow_metadata:
        choices.append(ConfirmChoice.METADATA)
    choices.append(ConfirmChoice.CANCEL)

    answer = prompter.select("What's next?", [choice.value for choice in choices])
    return ConfirmChoice(answer)


def metadata_survey(
    prompter: Prompter, issues: GitHubIssues, repo: RepoRef, state: MetadataState
) -> None:
    """Let the user pick assignees, labels, projects and a milestone.

    Fetches the repository's options for the chosen categories (plus any
    categories already named by flags, so the fetched metadata can resolve
    every name) and stores them on `state` for reuse at submit time.

    Raises:
        RuntimeError: If fetching repository metadata fails
    """
    chosen = prompter.multi_select("What would you like to add?", METADATA_CATEGORIES)

    wanted = RepoMetadataInput(
        assignees=METADATA_ASSIGNEES in chosen or bool(state.assignees),
        labels=METADATA_LABELS in chosen or bool(state.labels),
        projects=METADATA_PROJECTS in chosen or bool(state.projects),
        milestones=METADATA_MILESTONE in chosen or bool(state.milestones),
    )
    logger.debug("Fetching repository metadata: %s", wanted)
    metadata = issues.fetch_repo_metadata(repo, wanted)
    state.metadata = metadata

    if METADATA_ASSIGNEES in chosen:
        logins = [user.name for user in metadata.assignable_users]
        if logins:
            state.assignees = prompter.multi_select("Assignees", logins, state.assignees)
        else:
            _warn("no assignable users")

    if METADATA_LABELS in chosen:
        names = [label.name for label in metadata.labels]
        if names:
            state.labels = prompter.multi_select("Labels", names, state.labels)
        else:
            _warn("no labels in the repository")

    if METADATA_PROJECTS in chosen:
        names = [project.name for project in metadata.projects]
        if names:
            state.projects = prompter.multi_select("Projects", names, state.projects)
        else:
            _warn("no projects to choose from")

    if METADATA_MILESTONE in chosen:
        titles = [milestone.name for milestone in metadata.milestones]
        if titles:
            current = state.milestones[0] if state.milestones else NO_MILESTONE
            milestone = prompter.select("Milestone", [NO_MILESTONE, *titles], current)
            state.milestones = [] if milestone == NO_MILESTONE else [milestone]
        else:
            _warn("no milestones in the repository")


def title_body_survey(
    prompter: Prompter,
    issues: GitHubIssues,
    repo: RepoRef,
    state: MetadataState,
    *,
    title_provided: bool,
    body_provided: bool,
    templates: IssueTemplates,
    can_triage: bool,
) -> None:
    """Run the whole survey, updating `state` and setting `state.action`.

    Raises:
        RuntimeError: If fetching repository metadata fails
    """
    template_contents = ""
    if not body_provided:
        template_contents = _template_body(prompter, templates)
        if template_contents:
            state.body = template_contents

    if not title_provided:
        state.title = prompter.input("Title", state.title)

    if not body_provided:
        state.body = prompter.edit("Body", state.body)

    if not state.body:
        state.body = template_contents

    choice = confirm_submission(
        prompter, allow_preview=not state.has_metadata, allow_metadata=can_triage
    )
    if choice is ConfirmChoice.METADATA:
        metadata_survey(prompter, issues, repo, state)
        choice = confirm_submission(
            prompter, allow_preview=not state.has_metadata, allow_metadata=False
        )

    match choice:
        case ConfirmChoice.SUBMIT:
            state.action = Action.SUBMIT
        case ConfirmChoice.PREVIEW:
            state.action = Action.PREVIEW
        case ConfirmChoice.CANCEL:
            state.action = Action.CANCEL
        case ConfirmChoice.METADATA:
            raise AssertionError("metadata can only be added once")
