"""Command to display a single issue."""

import click

from ghi.cli.commands.shared import issue_from_argument, open_in_browser
from ghi.cli.error_boundary import cli_error_boundary
from ghi.cli.rendering import print_human_issue_preview, print_raw_issue_preview
from ghi.core.context import GhiContext


@click.command("view")
@click.argument("issue", metavar="{<number> | <url>}")
@click.option("-w", "--web", is_flag=True, help="Open an issue in the browser")
@click.pass_obj
@cli_error_boundary
def view_cmd(ctx: GhiContext, issue: str, web: bool) -> None:
    """View an issue.

    Display the title, body, and other information about an issue.
    With --web, open the issue in a web browser instead.
    """
    found, _ = issue_from_argument(ctx, issue)

    if web:
        open_in_browser(ctx, found.url)
        return

    if ctx.stdout_is_tty:
        print_human_issue_preview(found, now=ctx.time.now())
    else:
        print_raw_issue_preview(found)
