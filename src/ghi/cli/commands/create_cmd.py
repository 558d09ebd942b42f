"""Command to create a new issue."""

import logging
from typing import assert_never

import click

from ghi.cli.commands.shared import open_in_browser, split_values
from ghi.cli.ensure import Ensure
from ghi.cli.error_boundary import cli_error_boundary
from ghi.cli.output import machine_output, user_output
from ghi.cli.survey import title_body_survey
from ghi.core.context import GhiContext
from ghi.github.metadata import Action, MetadataState, resolve_create_params
from ghi.github.repo import RepoRef
from ghi.github.templates import IssueTemplates, discover_issue_templates
from ghi.github.urls import with_issue_query_params

logger = logging.getLogger(__name__)


def _new_issue_url(repo: RepoRef, state: MetadataState) -> str:
    return with_issue_query_params(
        repo.web_url("issues/new"),
        title=state.title,
        body=state.body,
        assignees=state.assignees,
        labels=state.labels,
        projects=state.projects,
        milestones=state.milestones,
    )


def _local_templates(ctx: GhiContext) -> IssueTemplates:
    # Templates describe the local clone, which is unrelated to an explicit --repo
    if ctx.repo_override:
        return IssueTemplates()
    return discover_issue_templates(ctx.git.get_toplevel_dir(ctx.cwd))


@click.command("create")
@click.option("-t", "--title", default=None, help="Supply a title. Will prompt for one otherwise.")
@click.option("-b", "--body", default=None, help="Supply a body. Will prompt for one otherwise.")
@click.option("-w", "--web", is_flag=True, help="Open the browser to create an issue")
@click.option(
    "-a", "--assignee", multiple=True, help="Assign people by their login (repeatable)"
)
@click.option("-l", "--label", multiple=True, help="Add labels by name (repeatable)")
@click.option("-p", "--project", multiple=True, help="Add the issue to projects by name")
@click.option("-m", "--milestone", default="", help="Add the issue to a milestone by title")
@click.pass_obj
@cli_error_boundary
def create_cmd(
    ctx: GhiContext,
    title: str | None,
    body: str | None,
    web: bool,
    assignee: tuple[str, ...],
    label: tuple[str, ...],
    project: tuple[str, ...],
    milestone: str,
) -> None:
    """Create a new issue.

    Without --title and --body, prompts for them when attached to a terminal.
    """
    repo = ctx.base_repo()
    templates = _local_templates(ctx)

    state = MetadataState(
        title=title or "",
        body=body or "",
        assignees=split_values(assignee),
        labels=split_values(label),
        projects=split_values(project),
        milestones=[milestone] if milestone else [],
    )

    if web:
        url = repo.web_url("issues/new")
        if state.title or state.body:
            url = _new_issue_url(repo, state)
        elif len(templates.non_legacy) > 1:
            url += "/choose"
        open_in_browser(ctx, url)
        return

    interactive = title is None or body is None
    Ensure.invariant(
        not interactive or ctx.can_prompt,
        "must provide --title and --body when not attached to a terminal",
    )

    user_output(f"\nCreating issue in {repo.full_name}\n")

    repo_info = ctx.issues.get_repo(repo)
    Ensure.issues_enabled(repo_info, repo)

    if interactive:
        title_body_survey(
            ctx.prompter,
            ctx.issues,
            repo,
            state,
            title_provided=bool(title),
            body_provided=bool(body),
            templates=templates,
            can_triage=repo_info.viewer_can_triage,
        )

    match state.action:
        case Action.CANCEL:
            user_output("Discarding.")
        case Action.PREVIEW:
            open_in_browser(ctx, _new_issue_url(repo, state))
        case Action.SUBMIT:
            Ensure.not_empty(state.title.strip(), "title can't be blank")
            params = resolve_create_params(ctx.issues, repo, state)
            logger.debug("Creating issue in %s", repo.full_name)
            result = ctx.issues.create_issue(repo, repo_info.id, params)
            machine_output(result.url)
        case _:
            assert_never(state.action)
