"""Repository references and web URLs."""

import re
from dataclasses import dataclass
from urllib.parse import urlparse

DEFAULT_HOST = "github.com"

# git@github.com:owner/repo.git, ssh://git@github.com/owner/repo.git, https://github.com/owner/repo
_SCP_LIKE_PATTERN = re.compile(r"^(?:[\w.-]+@)?(?P<host>[\w.-]+):(?P<path>[^/].*)$")


@dataclass(frozen=True)
class RepoRef:
    """A repository on a GitHub host."""

    owner: str
    name: str
    host: str = DEFAULT_HOST

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def web_url(self, path: str = "") -> str:
        """Web URL for this repository, optionally with a sub-path like "issues/new"."""
        base = f"https://{self.host}/{self.owner}/{self.name}"
        if path:
            return f"{base}/{path.lstrip('/')}"
        return base


def parse_repo_name(value: str, default_host: str = DEFAULT_HOST) -> RepoRef:
    """Parse an OWNER/REPO or HOST/OWNER/REPO string.

    Raises:
        ValueError: If the value does not have that shape
    """
    if "://" in value:
        parsed = urlparse(value)
        if not parsed.hostname:
            raise ValueError(f"expected the \"[HOST/]OWNER/REPO\" format, got {value!r}")
        value = f"{parsed.hostname}{parsed.path}"

    parts = value.strip("/").split("/")
    if len(parts) == 2 and all(parts):
        return RepoRef(owner=parts[0], name=_strip_git_suffix(parts[1]), host=default_host)
    if len(parts) == 3 and all(parts):
        return RepoRef(owner=parts[1], name=_strip_git_suffix(parts[2]), host=parts[0].lower())
    raise ValueError(f"expected the \"[HOST/]OWNER/REPO\" format, got {value!r}")


def repo_from_remote_url(url: str) -> RepoRef | None:
    """Extract the repository a git remote URL points at.

    Returns None for URLs that do not look like OWNER/REPO on some host
    (local paths, bare hosts).
    """
    url = url.strip()
    if "://" in url:
        parsed = urlparse(url)
        host = parsed.hostname
        path = parsed.path
    else:
        match = _SCP_LIKE_PATTERN.match(url)
        if match is None:
            return None
        host = match.group("host")
        path = match.group("path")

    if not host:
        return None

    parts = [part for part in path.strip("/").split("/") if part]
    if len(parts) != 2:
        return None

    host = host.lower()
    if host == "ssh.github.com":
        host = DEFAULT_HOST
    return RepoRef(owner=parts[0], name=_strip_git_suffix(parts[1]), host=host)


def _strip_git_suffix(name: str) -> str:
    return name[: -len(".git")] if name.endswith(".git") else name
