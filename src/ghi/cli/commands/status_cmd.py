"""Command to show issues relevant to the current user."""

import click

from ghi.cli.ensure import Ensure
from ghi.cli.error_boundary import cli_error_boundary
from ghi.cli.output import machine_output
from ghi.cli.rendering import print_status_section
from ghi.core.context import GhiContext


@click.command("status")
@click.pass_obj
@cli_error_boundary
def status_cmd(ctx: GhiContext) -> None:
    """Show status of relevant issues."""
    repo = ctx.base_repo()
    login = Ensure.not_none(
        ctx.issues.get_current_username(repo.host),
        f"not logged in to {repo.host}; run 'gh auth login' first",
    )

    status = ctx.issues.get_issue_status(repo, login)
    now = ctx.time.now()
    is_tty = ctx.stdout_is_tty

    machine_output()
    machine_output(f"Relevant issues in {repo.full_name}")
    machine_output()

    print_status_section(
        "Issues assigned to you",
        status.assigned,
        "There are no issues assigned to you",
        now=now,
        is_tty=is_tty,
    )
    print_status_section(
        "Issues mentioning you",
        status.mentioned,
        "There are no issues mentioning you",
        now=now,
        is_tty=is_tty,
    )
    print_status_section(
        "Issues opened by you",
        status.authored,
        "There are no issues opened by you",
        now=now,
        is_tty=is_tty,
    )
