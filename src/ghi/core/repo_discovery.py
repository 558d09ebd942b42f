"""Base repository discovery.

Determines which GitHub repository a command targets: an explicit
`--repo`/`GH_REPO` value wins, otherwise the local git remotes are consulted.
"""

import logging
from pathlib import Path

from ghi.core.git.abc import Git, Remote
from ghi.github.repo import RepoRef, parse_repo_name, repo_from_remote_url

logger = logging.getLogger(__name__)

# Remotes consulted first, in this order; any others follow in git's order
REMOTE_PRIORITY = ("upstream", "github", "origin")


def _remote_rank(remote: Remote) -> int:
    if remote.name in REMOTE_PRIORITY:
        return REMOTE_PRIORITY.index(remote.name)
    return len(REMOTE_PRIORITY)


def resolve_base_repo(
    *,
    repo_override: str | None,
    git: Git,
    cwd: Path,
    host: str,
) -> RepoRef:
    """Resolve the repository a command operates on.

    Args:
        repo_override: "[HOST/]OWNER/REPO" from --repo or GH_REPO, if any
        git: Git gateway used to read remotes
        cwd: Directory to look for a git repository in
        host: GitHub host remotes must point at

    Raises:
        ValueError: If the override is malformed or no usable remote exists
    """
    if repo_override:
        repo = parse_repo_name(repo_override, default_host=host)
        logger.debug("Using repository override %s/%s", repo.host, repo.full_name)
        return repo

    remotes = sorted(git.list_remotes(cwd), key=_remote_rank)
    if not remotes:
        raise ValueError(
            "could not determine base repository: no git remotes found "
            "(run inside a clone or pass --repo OWNER/REPO)"
        )

    for remote in remotes:
        repo = repo_from_remote_url(remote.url)
        if repo is not None and repo.host == host:
            logger.debug("Resolved repository %s from remote %s", repo.full_name, remote.name)
            return repo

    raise ValueError(f"none of the git remotes point to a repository on {host}")
