"""Abstract interface for the local git operations ghi needs."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Remote:
    """A git remote and its fetch URL."""

    name: str
    url: str


class Git(ABC):
    """Read-only access to the git repository around the working directory."""

    @abstractmethod
    def get_toplevel_dir(self, cwd: Path) -> Path | None:
        """Get the root of the work tree containing `cwd`.

        Returns:
            Repository root, or None when `cwd` is not inside a git repository
        """
        ...

    @abstractmethod
    def list_remotes(self, cwd: Path) -> list[Remote]:
        """List configured remotes with their fetch URLs.

        Returns:
            Remotes in the order git reports them (empty outside a repository)
        """
        ...
