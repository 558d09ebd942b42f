"""Output utilities for CLI commands with clear intent.

user_output() is for diagnostics and messages meant for a person (stderr);
machine_output() is for data a script may capture (stdout).
"""

from typing import Any

import click


def user_output(message: Any = "", *, nl: bool = True) -> None:
    """Write a user-facing message to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: Any = "", *, nl: bool = True) -> None:
    """Write data to stdout."""
    click.echo(message, nl=nl)
