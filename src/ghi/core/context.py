"""Application context with dependency injection."""

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from ghi.core.browser.abc import Browser
from ghi.core.browser.real import RealBrowser
from ghi.core.config_store import (
    ConfigStore,
    GlobalConfig,
    RealConfigStore,
    effective_browser,
    effective_editor,
    effective_host,
)
from ghi.core.git.abc import Git
from ghi.core.git.real import RealGit
from ghi.core.prompter.abc import Prompter
from ghi.core.prompter.real import RealPrompter
from ghi.core.repo_discovery import resolve_base_repo
from ghi.core.time.abc import Time
from ghi.core.time.real import RealTime
from ghi.github.issues import GitHubIssues, RealGitHubIssues
from ghi.github.repo import DEFAULT_HOST, RepoRef


@dataclass(frozen=True)
class GhiContext:
    """Immutable context holding all dependencies for ghi operations.

    Created at CLI entry point and threaded through the application as
    click's `obj`. Frozen to prevent accidental modification at runtime;
    the root command derives a copy when `--repo` is given.
    """

    issues: GitHubIssues
    git: Git
    browser: Browser
    prompter: Prompter
    time: Time
    config_store: ConfigStore
    global_config: GlobalConfig
    cwd: Path  # Current working directory at CLI invocation
    host: str
    stdin_is_tty: bool
    stdout_is_tty: bool
    repo_override: str | None  # --repo, else GH_REPO

    @property
    def can_prompt(self) -> bool:
        """True when both ends are terminals and prompting is not disabled."""
        return self.stdin_is_tty and self.stdout_is_tty and not self.global_config.prompt_disabled

    def base_repo(self) -> RepoRef:
        """Resolve the repository this invocation targets.

        Raises:
            ValueError: If no repository can be determined
        """
        return resolve_base_repo(
            repo_override=self.repo_override,
            git=self.git,
            cwd=self.cwd,
            host=self.host,
        )

    @staticmethod
    def for_test(
        issues: GitHubIssues | None = None,
        git: Git | None = None,
        browser: Browser | None = None,
        prompter: Prompter | None = None,
        time: Time | None = None,
        config_store: ConfigStore | None = None,
        global_config: GlobalConfig | None = None,
        cwd: Path | None = None,
        host: str = DEFAULT_HOST,
        stdin_is_tty: bool = False,
        stdout_is_tty: bool = False,
        repo_override: str | None = "test-owner/test-repo",
    ) -> "GhiContext":
        """Create test context with optional pre-configured integration classes.

        Unspecified integrations default to empty fakes. The default context
        is non-interactive and targets test-owner/test-repo, matching the
        FakeGitHubIssues defaults.

        Example:
            >>> issues = FakeGitHubIssues(issues={42: issue})
            >>> ctx = GhiContext.for_test(issues=issues, stdout_is_tty=True)
        """
        from ghi.core.browser.fake import FakeBrowser
        from ghi.core.config_store import FakeConfigStore
        from ghi.core.git.fake import FakeGit
        from ghi.core.prompter.fake import FakePrompter
        from ghi.core.time.fake import FakeTime
        from ghi.github.issues import FakeGitHubIssues

        if issues is None:
            issues = FakeGitHubIssues()

        if git is None:
            git = FakeGit()

        if browser is None:
            browser = FakeBrowser()

        if prompter is None:
            prompter = FakePrompter()

        if time is None:
            time = FakeTime()

        if global_config is None:
            global_config = GlobalConfig()

        if config_store is None:
            config_store = FakeConfigStore(config=global_config)

        return GhiContext(
            issues=issues,
            git=git,
            browser=browser,
            prompter=prompter,
            time=time,
            config_store=config_store,
            global_config=global_config,
            cwd=cwd or Path("/test/default/cwd"),
            host=host,
            stdin_is_tty=stdin_is_tty,
            stdout_is_tty=stdout_is_tty,
            repo_override=repo_override,
        )


def create_context() -> GhiContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution.

    Raises:
        ValueError: If the config file is malformed
    """
    config_store = RealConfigStore()
    global_config = config_store.load()

    return GhiContext(
        issues=RealGitHubIssues(),
        git=RealGit(),
        browser=RealBrowser(effective_browser(global_config, os.environ)),
        prompter=RealPrompter(effective_editor(global_config, os.environ)),
        time=RealTime(),
        config_store=config_store,
        global_config=global_config,
        cwd=Path.cwd(),
        host=effective_host(global_config, os.environ),
        stdin_is_tty=sys.stdin.isatty(),
        stdout_is_tty=sys.stdout.isatty(),
        repo_override=os.environ.get("GH_REPO") or None,
    )
