"""CLI error handling utilities with styled output.

This module provides the Ensure class for asserting invariants in CLI commands
with consistent, user-friendly error messages. All errors use red "Error:" prefix
for visual consistency.
"""

from typing import TypeVar

import click

from ghi.cli.output import user_output
from ghi.github.issues.types import RepoInfo
from ghi.github.repo import RepoRef

T = TypeVar("T")


def _fail(error_message: str) -> None:
    user_output(click.style("Error: ", fg="red") + error_message)
    raise SystemExit(1)


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        """Ensure condition is true, otherwise output styled error and exit.

        Args:
            condition: Boolean condition to check
            error_message: Error message to display if condition is false.
                          "Error: " prefix will be added automatically in red.

        Raises:
            SystemExit: If condition is false (with exit code 1)
        """
        if not condition:
            _fail(error_message)

    @staticmethod
    def not_none(value: T | None, error_message: str) -> T:
        """Ensure value is not None, otherwise output styled error and exit.

        This method provides type narrowing: it takes `T | None` and returns `T`.

        Raises:
            SystemExit: If value is None (with exit code 1)

        Example:
            >>> login = Ensure.not_none(ctx.issues.get_current_username(host), "not logged in")
        """
        if value is None:
            _fail(error_message)
        assert value is not None
        return value

    @staticmethod
    def not_empty(value: str | list | dict | None, error_message: str) -> None:
        """Ensure value is not empty (non-empty string, list, dict), otherwise exit.

        Raises:
            SystemExit: If value is None, empty string, empty list, or empty dict

        Example:
            >>> Ensure.not_empty(title, "title can't be blank")
        """
        if not value:
            _fail(error_message)

    @staticmethod
    def issues_enabled(repo_info: RepoInfo, repo: RepoRef) -> None:
        """Ensure the repository accepts issues.

        Raises:
            SystemExit: If the repository has issues disabled
        """
        if not repo_info.has_issues_enabled:
            _fail(f"the '{repo.full_name}' repository has disabled issues")
