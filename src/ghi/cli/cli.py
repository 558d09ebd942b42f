import dataclasses
import logging
import os

import click

from ghi.cli.commands.close_cmd import close_cmd, reopen_cmd
from ghi.cli.commands.config_cmd import config_group
from ghi.cli.commands.create_cmd import create_cmd
from ghi.cli.commands.list_cmd import list_issues
from ghi.cli.commands.status_cmd import status_cmd
from ghi.cli.commands.view_cmd import view_cmd
from ghi.cli.error_boundary import cli_error_boundary
from ghi.cli.help_formatter import GroupedCommandGroup
from ghi.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


def _configure_logging() -> None:
    if os.environ.get("GHI_DEBUG"):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


@click.group(cls=GroupedCommandGroup, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="ghi")
@click.option(
    "-R",
    "--repo",
    "repo",
    default=None,
    metavar="[HOST/]OWNER/REPO",
    help="Select another repository using the [HOST/]OWNER/REPO format",
)
@click.pass_context
@cli_error_boundary
def cli(ctx: click.Context, repo: str | None) -> None:
    """Work with GitHub issues from the command line."""
    _configure_logging()
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context()
    if repo is not None:
        ctx.obj = dataclasses.replace(ctx.obj, repo_override=repo)


# Register all commands
cli.add_command(list_issues)
cli.add_command(status_cmd)
cli.add_command(view_cmd)
cli.add_command(create_cmd)
cli.add_command(close_cmd)
cli.add_command(reopen_cmd)
cli.add_command(config_group)


def main() -> None:
    """CLI entry point used by the `ghi` console script."""
    cli()
