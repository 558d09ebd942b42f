"""Command to list issues with filtering."""

import click

from ghi.cli.commands.shared import open_in_browser, split_values
from ghi.cli.display_utils import list_header
from ghi.cli.ensure import Ensure
from ghi.cli.error_boundary import cli_error_boundary
from ghi.cli.output import user_output
from ghi.cli.rendering import print_issues
from ghi.core.context import GhiContext
from ghi.github.urls import FilterOptions, list_url_with_query

# Options whose explicit use makes the header say "that match your search"
FILTER_PARAMS = ("state", "label", "assignee", "author", "mention", "milestone")


@click.command("list")
@click.option("-w", "--web", is_flag=True, help="Open the browser to list the issue(s)")
@click.option("-a", "--assignee", default="", help="Filter by assignee")
@click.option(
    "-l",
    "--label",
    multiple=True,
    help="Filter by label (repeatable or comma-separated; all must match)",
)
@click.option(
    "-s",
    "--state",
    type=click.Choice(["open", "closed", "all"], case_sensitive=False),
    default="open",
    show_default=True,
    help="Filter by state",
)
@click.option(
    "-L", "--limit", type=int, default=30, show_default=True, help="Maximum number of issues"
)
@click.option("-A", "--author", default="", help="Filter by author")
@click.option("--mention", default="", help="Filter by mention")
@click.option("-m", "--milestone", default="", help="Filter by milestone title")
@click.pass_context
@cli_error_boundary
def list_issues(
    click_ctx: click.Context,
    web: bool,
    assignee: str,
    label: tuple[str, ...],
    state: str,
    limit: int,
    author: str,
    mention: str,
    milestone: str,
) -> None:
    """List and filter issues in this repository."""
    ctx: GhiContext = click_ctx.obj
    Ensure.invariant(limit > 0, f"invalid limit: {limit}")

    repo = ctx.base_repo()
    filters = FilterOptions(
        state=state.lower(),
        assignee=assignee,
        labels=split_values(label),
        author=author,
        mention=mention,
        milestone=milestone,
    )

    if web:
        open_in_browser(ctx, list_url_with_query(repo.web_url("issues"), filters))
        return

    result = ctx.issues.list_issues(repo, filters, limit)

    has_filters = any(
        click_ctx.get_parameter_source(name) is click.core.ParameterSource.COMMANDLINE
        for name in FILTER_PARAMS
    )
    if ctx.stdout_is_tty:
        header = list_header(
            repo.full_name, "issue", len(result.issues), result.total_count, has_filters
        )
        user_output(f"\n{header}\n")

    print_issues(
        result.issues,
        result.total_count,
        now=ctx.time.now(),
        is_tty=ctx.stdout_is_tty,
    )
