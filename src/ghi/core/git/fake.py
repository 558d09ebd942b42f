"""Fake Git implementation for testing."""

from pathlib import Path

from ghi.core.git.abc import Git, Remote


class FakeGit(Git):
    """In-memory fake implementation.

    This class has NO public setup methods. All state is provided via constructor.
    """

    def __init__(
        self,
        *,
        toplevel_dir: Path | None = None,
        remotes: list[Remote] | None = None,
    ) -> None:
        """Create FakeGit with pre-configured state.

        Args:
            toplevel_dir: Repository root reported for any cwd (None = not a repo)
            remotes: Remotes reported by list_remotes
        """
        self._toplevel_dir = toplevel_dir
        self._remotes = remotes or []

    def get_toplevel_dir(self, cwd: Path) -> Path | None:
        return self._toplevel_dir

    def list_remotes(self, cwd: Path) -> list[Remote]:
        if self._toplevel_dir is None:
            return []
        return list(self._remotes)
