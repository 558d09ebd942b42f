"""Production Git implementation using subprocess."""

import subprocess
from pathlib import Path

from ghi.core.git.abc import Git, Remote


class RealGit(Git):
    """Production implementation using subprocess.

    Failures mean "no repository here" and are reported as empty results.
    """

    def get_toplevel_dir(self, cwd: Path) -> Path | None:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None
        return Path(result.stdout.strip())

    def list_remotes(self, cwd: Path) -> list[Remote]:
        result = subprocess.run(
            ["git", "remote", "-v"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return []

        remotes: list[Remote] = []
        for line in result.stdout.splitlines():
            # origin\tgit@github.com:o/r.git (fetch)
            parts = line.split()
            if len(parts) != 3 or parts[2] != "(fetch)":
                continue
            remotes.append(Remote(name=parts[0], url=parts[1]))
        return remotes
