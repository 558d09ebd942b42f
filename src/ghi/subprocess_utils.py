"""Subprocess execution for GitHub CLI commands.

Every remote call ghi makes goes through the `gh` binary, which owns
authentication and transport. This module turns its failures into
RuntimeError with gh's own message attached.
"""

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


def execute_gh_command(
    cmd: list[str],
    cwd: Path | None = None,
    *,
    stdin_input: str | None = None,
) -> str:
    """Execute a gh CLI command and return stdout.

    Args:
        cmd: Command and arguments to execute
        cwd: Working directory for command execution (None = inherit)
        stdin_input: Text piped to the command's stdin (e.g. a GraphQL payload
            for `gh api graphql --input -`)

    Returns:
        stdout from the command

    Raises:
        RuntimeError: If the command fails or gh is not installed
    """
    logger.debug("Running: %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            input=stdin_input,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=True,
        )
        return result.stdout
    except subprocess.CalledProcessError as e:
        cmd_str = " ".join(cmd)
        error_msg = f"Failed to execute gh command '{cmd_str}'"
        if e.stderr:
            error_msg += f": {e.stderr.strip()}"
        raise RuntimeError(error_msg) from e
    except FileNotFoundError as e:
        error_msg = f"Command not found: {cmd[0]}. Install the GitHub CLI from https://cli.github.com"
        raise RuntimeError(error_msg) from e


def run_gh_command(
    cmd: list[str],
    *,
    stdin_input: str | None = None,
) -> subprocess.CompletedProcess[str]:
    """Execute a gh CLI command without failing on a non-zero exit.

    `gh api graphql` exits non-zero when the response carries errors but
    still prints the partial response on stdout; callers that can use
    partial data inspect the result themselves.

    Raises:
        RuntimeError: If gh is not installed
    """
    logger.debug("Running: %s", " ".join(cmd))
    try:
        return subprocess.run(
            cmd,
            input=stdin_input,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=False,
        )
    except FileNotFoundError as e:
        error_msg = f"Command not found: {cmd[0]}. Install the GitHub CLI from https://cli.github.com"
        raise RuntimeError(error_msg) from e
