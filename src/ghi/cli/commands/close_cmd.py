"""Commands to close and reopen issues.

Both are idempotent: an issue already in the requested state is reported
with a warning and left untouched.
"""

import click

from ghi.cli.commands.shared import issue_from_argument
from ghi.cli.error_boundary import cli_error_boundary
from ghi.cli.output import user_output
from ghi.core.context import GhiContext


@click.command("close")
@click.argument("issue", metavar="{<number> | <url>}")
@click.pass_obj
@cli_error_boundary
def close_cmd(ctx: GhiContext, issue: str) -> None:
    """Close issue."""
    found, repo = issue_from_argument(ctx, issue)

    if found.closed:
        user_output(
            click.style("!", fg="yellow")
            + f" Issue #{found.number} ({found.title}) is already closed"
        )
        return

    ctx.issues.close_issue(repo, found)
    user_output(click.style("✔", fg="red") + f" Closed issue #{found.number} ({found.title})")


@click.command("reopen")
@click.argument("issue", metavar="{<number> | <url>}")
@click.pass_obj
@cli_error_boundary
def reopen_cmd(ctx: GhiContext, issue: str) -> None:
    """Reopen issue."""
    found, repo = issue_from_argument(ctx, issue)

    if not found.closed:
        user_output(
            click.style("!", fg="yellow") + f" Issue #{found.number} ({found.title}) is already open"
        )
        return

    ctx.issues.reopen_issue(repo, found)
    user_output(click.style("✔", fg="green") + f" Reopened issue #{found.number} ({found.title})")
