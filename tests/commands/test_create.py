"""Tests for the create command."""

from pathlib import Path

from click.testing import CliRunner

from ghi.cli.cli import cli
from ghi.core.browser.fake import FakeBrowser
from ghi.core.config_store import GlobalConfig
from ghi.core.context import GhiContext
from ghi.core.git.abc import Remote
from ghi.core.git.fake import FakeGit
from ghi.core.prompter.fake import FakePrompter
from ghi.github.issues import FakeGitHubIssues, IssueCreateParams, RepoInfo
from tests.test_utils.issue_builders import create_test_metadata

NEW_ISSUE_URL = "https://github.com/test-owner/test-repo/issues/new"


def _interactive_ctx(issues: FakeGitHubIssues, prompter: FakePrompter, **kwargs) -> GhiContext:
    return GhiContext.for_test(
        issues=issues, prompter=prompter, stdin_is_tty=True, stdout_is_tty=True, **kwargs
    )


def test_create_with_title_and_body_skips_survey() -> None:
    """With both flags no prompt is shown and the URL is printed on stdout."""
    # Arrange
    issues = FakeGitHubIssues()
    prompter = FakePrompter()
    ctx = _interactive_ctx(issues, prompter)

    # Act
    result = CliRunner().invoke(cli, ["create", "-t", "Crash", "-b", "Steps"], obj=ctx)

    # Assert
    assert result.exit_code == 0, result.output
    assert result.stdout == "https://github.com/test-owner/test-repo/issues/1\n"
    assert "Creating issue in test-owner/test-repo" in result.stderr
    assert issues.created_issues == [IssueCreateParams(title="Crash", body="Steps")]
    assert prompter.questions == []
    assert issues.resolved_names == []


def test_create_resolves_metadata_flags() -> None:
    issues = FakeGitHubIssues(metadata=create_test_metadata())
    ctx = GhiContext.for_test(issues=issues)

    result = CliRunner().invoke(
        cli,
        [
            "create",
            "-t",
            "T",
            "-b",
            "",
            "-a",
            "monalisa",
            "-l",
            "bug,docs",
            "-p",
            "Roadmap",
            "-m",
            "v1.0",
        ],
        obj=ctx,
    )

    assert result.exit_code == 0, result.output
    assert issues.created_issues == [
        IssueCreateParams(
            title="T",
            body="",
            assignee_ids=["U_mona"],
            label_ids=["L_bug", "L_docs"],
            project_ids=["P_roadmap"],
            milestone_id="M_v1",
        )
    ]


def test_create_unknown_label_creates_nothing() -> None:
    issues = FakeGitHubIssues(metadata=create_test_metadata())
    ctx = GhiContext.for_test(issues=issues)

    result = CliRunner().invoke(cli, ["create", "-t", "T", "-b", "B", "-l", "nope"], obj=ctx)

    assert result.exit_code == 1
    assert "Error: could not add label: 'nope' not found" in result.output
    assert issues.mutation_count == 0


def test_create_without_terminal_requires_title_and_body() -> None:
    """The check happens before any network call."""
    issues = FakeGitHubIssues()
    ctx = GhiContext.for_test(issues=issues)

    result = CliRunner().invoke(cli, ["create", "-t", "Only a title"], obj=ctx)

    assert result.exit_code == 1
    assert "must provide --title and --body when not attached to a terminal" in result.output
    assert issues.repo_lookups == []
    assert issues.mutation_count == 0


def test_create_prompt_disabled_is_non_interactive() -> None:
    issues = FakeGitHubIssues()
    ctx = _interactive_ctx(
        issues, FakePrompter(), global_config=GlobalConfig(prompt="disabled")
    )

    result = CliRunner().invoke(cli, ["create"], obj=ctx)

    assert result.exit_code == 1
    assert "must provide --title and --body" in result.output


def test_create_blank_title() -> None:
    issues = FakeGitHubIssues()
    ctx = GhiContext.for_test(issues=issues)

    result = CliRunner().invoke(cli, ["create", "-t", "   ", "-b", "B"], obj=ctx)

    assert result.exit_code == 1
    assert "Error: title can't be blank" in result.output
    assert issues.mutation_count == 0


def test_create_in_repository_with_issues_disabled() -> None:
    issues = FakeGitHubIssues(
        repo_info=RepoInfo(
            id="R_test",
            name_with_owner="test-owner/test-repo",
            has_issues_enabled=False,
            viewer_permission="ADMIN",
        )
    )
    ctx = GhiContext.for_test(issues=issues)

    result = CliRunner().invoke(cli, ["create", "-t", "T", "-b", "B"], obj=ctx)

    assert result.exit_code == 1
    assert "the 'test-owner/test-repo' repository has disabled issues" in result.output
    assert issues.mutation_count == 0


def test_create_interactive_submit() -> None:
    issues = FakeGitHubIssues()
    prompter = FakePrompter(inputs=["Crash"], edits=["Steps"], selects=["Submit"])
    ctx = _interactive_ctx(issues, prompter)

    result = CliRunner().invoke(cli, ["create"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert issues.created_issues == [IssueCreateParams(title="Crash", body="Steps")]
    assert prompter.questions == ["Title", "Body", "What's next?"]


def test_create_interactive_blank_title() -> None:
    issues = FakeGitHubIssues()
    prompter = FakePrompter(inputs=[""], edits=["Steps"], selects=["Submit"])
    ctx = _interactive_ctx(issues, prompter)

    result = CliRunner().invoke(cli, ["create"], obj=ctx)

    assert result.exit_code == 1
    assert "title can't be blank" in result.output
    assert issues.mutation_count == 0


def test_create_interactive_preview_opens_browser() -> None:
    issues = FakeGitHubIssues()
    browser = FakeBrowser()
    prompter = FakePrompter(inputs=["Crash"], edits=["Steps"], selects=["Continue in browser"])
    ctx = _interactive_ctx(issues, prompter, browser=browser)

    result = CliRunner().invoke(cli, ["create"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert browser.opened_urls == [f"{NEW_ISSUE_URL}?body=Steps&title=Crash"]
    assert issues.mutation_count == 0


def test_create_interactive_cancel() -> None:
    issues = FakeGitHubIssues()
    prompter = FakePrompter(edits=["Steps"], selects=["Cancel"])
    ctx = _interactive_ctx(issues, prompter)

    result = CliRunner().invoke(cli, ["create", "--title", "Crash"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Discarding." in result.stderr
    assert issues.mutation_count == 0
    assert "Title" not in prompter.questions


def test_create_interactive_with_metadata() -> None:
    """Metadata picked in the survey is resolved from the fetched lists."""
    issues = FakeGitHubIssues(metadata=create_test_metadata())
    prompter = FakePrompter(
        inputs=["Crash"],
        edits=["Steps"],
        selects=["Add metadata", "Submit"],
        multi_selects=[["Assignees"], ["hubot"]],
    )
    ctx = _interactive_ctx(issues, prompter)

    result = CliRunner().invoke(cli, ["create"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert issues.created_issues[0].assignee_ids == ["U_hubot"]
    assert issues.resolved_names == []


def test_create_read_only_viewer_cannot_add_metadata() -> None:
    issues = FakeGitHubIssues(
        repo_info=RepoInfo(
            id="R_test",
            name_with_owner="test-owner/test-repo",
            has_issues_enabled=True,
            viewer_permission="READ",
        )
    )
    prompter = FakePrompter(inputs=["Crash"], edits=["Steps"], selects=["Submit"])
    ctx = _interactive_ctx(issues, prompter)

    result = CliRunner().invoke(cli, ["create"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert prompter.offered == [["Submit", "Continue in browser", "Cancel"]]


def test_create_web_with_title() -> None:
    issues = FakeGitHubIssues()
    browser = FakeBrowser()
    ctx = GhiContext.for_test(issues=issues, browser=browser)

    result = CliRunner().invoke(
        cli, ["create", "--web", "-t", "Crash", "-l", "bug", "-m", "v1.0"], obj=ctx
    )

    assert result.exit_code == 0, result.output
    assert browser.opened_urls == [f"{NEW_ISSUE_URL}?labels=bug&milestone=v1.0&title=Crash"]
    assert issues.repo_lookups == []
    assert issues.mutation_count == 0


def test_create_web_with_templates_opens_chooser(tmp_path: Path) -> None:
    template_dir = tmp_path / ".github" / "ISSUE_TEMPLATE"
    template_dir.mkdir(parents=True)
    (template_dir / "bug.md").write_text("Bug\n", encoding="utf-8")
    (template_dir / "feature.md").write_text("Feature\n", encoding="utf-8")
    git = FakeGit(
        toplevel_dir=tmp_path,
        remotes=[Remote("origin", "git@github.com:test-owner/test-repo.git")],
    )
    browser = FakeBrowser()
    ctx = GhiContext.for_test(git=git, browser=browser, cwd=tmp_path, repo_override=None)

    result = CliRunner().invoke(cli, ["create", "--web"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert browser.opened_urls == [f"{NEW_ISSUE_URL}/choose"]


def test_create_interactive_uses_local_template(tmp_path: Path) -> None:
    template_dir = tmp_path / ".github" / "ISSUE_TEMPLATE"
    template_dir.mkdir(parents=True)
    (template_dir / "bug.md").write_text(
        "---\nname: Bug report\n---\n## Steps\n", encoding="utf-8"
    )
    git = FakeGit(
        toplevel_dir=tmp_path,
        remotes=[Remote("origin", "https://github.com/test-owner/test-repo.git")],
    )
    issues = FakeGitHubIssues()
    prompter = FakePrompter(inputs=["Crash"], edits=[""], selects=["Bug report", "Submit"])
    ctx = _interactive_ctx(issues, prompter, git=git, cwd=tmp_path, repo_override=None)

    result = CliRunner().invoke(cli, ["create"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert issues.created_issues == [IssueCreateParams(title="Crash", body="## Steps\n")]
    assert prompter.questions[0] == "Choose a template"


def test_create_empty_title_flag_still_prompts_for_title() -> None:
    """An empty --title counts as missing, so the survey asks for one."""
    issues = FakeGitHubIssues()
    prompter = FakePrompter(inputs=["Crash"], edits=["Steps"], selects=["Submit"])
    ctx = _interactive_ctx(issues, prompter)

    result = CliRunner().invoke(cli, ["create", "--title", ""], obj=ctx)

    assert result.exit_code == 0, result.output
    assert prompter.questions == ["Title", "Body", "What's next?"]
    assert issues.created_issues == [IssueCreateParams(title="Crash", body="Steps")]


def test_create_empty_body_flag_opens_editor() -> None:
    """An empty --body counts as missing, so the editor opens for it."""
    issues = FakeGitHubIssues()
    prompter = FakePrompter(inputs=["Crash"], edits=["Steps"], selects=["Submit"])
    ctx = _interactive_ctx(issues, prompter)

    result = CliRunner().invoke(cli, ["create", "--body", ""], obj=ctx)

    assert result.exit_code == 0, result.output
    assert prompter.questions == ["Title", "Body", "What's next?"]
    assert issues.created_issues == [IssueCreateParams(title="Crash", body="Steps")]
