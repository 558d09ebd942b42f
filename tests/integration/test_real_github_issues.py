"""Tests for RealGitHubIssues with mocked subprocess execution.

These tests verify that RealGitHubIssues sends the right GraphQL payloads
through `gh api graphql` and handles responses. We use pytest monkeypatch
to mock subprocess calls.
"""

import json
import subprocess
from typing import Any

import pytest
from pytest import MonkeyPatch

from ghi.github.issues import IssueCreateParams, RealGitHubIssues, RepoMetadataInput
from ghi.github.repo import RepoRef
from ghi.github.urls import FilterOptions
from tests.test_utils.issue_builders import create_test_issue
from tests.test_utils.subprocess_helpers import completed, mock_subprocess_run

REPO = RepoRef(owner="octo", name="hello")


def _issue_node(number: int, **overrides: Any) -> dict[str, Any]:
    node: dict[str, Any] = {
        "id": f"I_{number}",
        "number": number,
        "title": f"Issue {number}",
        "body": "",
        "state": "OPEN",
        "url": f"https://github.com/octo/hello/issues/{number}",
        "createdAt": "2024-01-01T00:00:00Z",
        "updatedAt": "2024-01-02T00:00:00Z",
        "author": {"login": "monalisa"},
        "comments": {"totalCount": 2},
        "assignees": {"nodes": [{"login": "hubot"}], "totalCount": 1},
        "labels": {"nodes": [{"name": "bug"}], "totalCount": 1},
        "milestone": None,
    }
    node.update(overrides)
    return node


def _graphql_recorder(
    responses: list[dict[str, Any]], payloads: list[dict[str, Any]], commands: list[list[str]]
):
    def mock_run(cmd: list[str], **kwargs) -> subprocess.CompletedProcess:
        commands.append(cmd)
        payloads.append(json.loads(kwargs["input"]))
        response = responses.pop(0)
        returncode = 1 if response.get("errors") else 0
        return completed(cmd, stdout=json.dumps(response), returncode=returncode)

    return mock_run


def test_list_issues_sends_filters_as_variables(monkeypatch: MonkeyPatch) -> None:
    """Filters that are set become query variables; unset ones are omitted."""
    payloads: list[dict[str, Any]] = []
    commands: list[list[str]] = []
    responses = [
        {
            "data": {
                "repository": {
                    "hasIssuesEnabled": True,
                    "issues": {
                        "totalCount": 7,
                        "nodes": [_issue_node(3), _issue_node(2)],
                        "pageInfo": {"hasNextPage": True, "endCursor": "c1"},
                    },
                }
            }
        }
    ]

    with mock_subprocess_run(monkeypatch, _graphql_recorder(responses, payloads, commands)):
        result = RealGitHubIssues().list_issues(
            REPO, FilterOptions(state="closed", labels=["bug"], author="monalisa"), limit=2
        )

    assert commands[0][:3] == ["gh", "api", "graphql"]
    assert "--hostname" in commands[0]
    assert "github.com" in commands[0]
    variables = payloads[0]["variables"]
    assert variables["states"] == ["CLOSED"]
    assert variables["labels"] == ["bug"]
    assert variables["author"] == "monalisa"
    assert variables["limit"] == 2
    assert "assignee" not in variables
    assert "mention" not in variables
    assert "milestone" not in variables

    assert result.total_count == 7
    assert [issue.number for issue in result.issues] == [3, 2]
    assert result.issues[0].assignees == ["hubot"]
    assert result.issues[0].comments_count == 2


def test_list_issues_paginates_until_limit(monkeypatch: MonkeyPatch) -> None:
    payloads: list[dict[str, Any]] = []
    commands: list[list[str]] = []

    def page(numbers: list[int], has_next: bool, cursor: str | None) -> dict[str, Any]:
        return {
            "data": {
                "repository": {
                    "hasIssuesEnabled": True,
                    "issues": {
                        "totalCount": 150,
                        "nodes": [_issue_node(n) for n in numbers],
                        "pageInfo": {"hasNextPage": has_next, "endCursor": cursor},
                    },
                }
            }
        }

    responses = [
        page(list(range(150, 50, -1)), True, "c1"),
        page(list(range(50, 30, -1)), True, "c2"),
    ]

    with mock_subprocess_run(monkeypatch, _graphql_recorder(responses, payloads, commands)):
        result = RealGitHubIssues().list_issues(REPO, FilterOptions(), limit=120)

    assert len(result.issues) == 120
    assert payloads[0]["variables"]["limit"] == 100
    assert payloads[1]["variables"]["limit"] == 20
    assert payloads[1]["variables"]["endCursor"] == "c1"


def test_list_issues_disabled_repository(monkeypatch: MonkeyPatch) -> None:
    responses = [{"data": {"repository": {"hasIssuesEnabled": False, "issues": {}}}}]

    with mock_subprocess_run(monkeypatch, _graphql_recorder(responses, [], [])):
        with pytest.raises(RuntimeError, match="the 'octo/hello' repository has disabled issues"):
            RealGitHubIssues().list_issues(REPO, FilterOptions(), limit=30)


def test_list_issues_resolves_milestone_title(monkeypatch: MonkeyPatch) -> None:
    """A milestone title is mapped to its number before querying."""
    commands: list[list[str]] = []
    payloads: list[dict[str, Any]] = []

    def mock_run(cmd: list[str], **kwargs) -> subprocess.CompletedProcess:
        commands.append(cmd)
        if "graphql" not in cmd:
            return completed(cmd, stdout="4\n")
        payloads.append(json.loads(kwargs["input"]))
        response = {
            "data": {
                "repository": {
                    "hasIssuesEnabled": True,
                    "issues": {
                        "totalCount": 0,
                        "nodes": [],
                        "pageInfo": {"hasNextPage": False, "endCursor": None},
                    },
                }
            }
        }
        return completed(cmd, stdout=json.dumps(response))

    with mock_subprocess_run(monkeypatch, mock_run):
        RealGitHubIssues().list_issues(REPO, FilterOptions(milestone="Big 1.0"), limit=30)

    assert "repos/octo/hello/milestones?state=all&per_page=100" in commands[0]
    assert '.[] | select(.title == "Big 1.0") | .number' in commands[0]
    assert payloads[0]["variables"]["milestone"] == "4"


def test_list_issues_unknown_milestone(monkeypatch: MonkeyPatch) -> None:
    def mock_run(cmd: list[str], **kwargs) -> subprocess.CompletedProcess:
        return completed(cmd, stdout="")

    with mock_subprocess_run(monkeypatch, mock_run):
        with pytest.raises(RuntimeError, match='no milestone found with title "nope"'):
            RealGitHubIssues().list_issues(REPO, FilterOptions(milestone="nope"), limit=30)


def test_get_issue_parses_details(monkeypatch: MonkeyPatch) -> None:
    node = _issue_node(
        12,
        body="Hello",
        milestone={"title": "v1.0"},
        projectCards={
            "nodes": [{"project": {"name": "Roadmap"}, "column": None}],
            "totalCount": 1,
        },
    )
    responses = [{"data": {"repository": {"hasIssuesEnabled": True, "issue": node}}}]
    payloads: list[dict[str, Any]] = []

    with mock_subprocess_run(monkeypatch, _graphql_recorder(responses, payloads, [])):
        issue = RealGitHubIssues().get_issue(REPO, 12)

    assert payloads[0]["variables"] == {"owner": "octo", "repo": "hello", "number": 12}
    assert issue.number == 12
    assert issue.body == "Hello"
    assert issue.milestone == "v1.0"
    assert issue.project_cards[0].project_name == "Roadmap"
    assert issue.project_cards[0].column_name == ""
    assert issue.author == "monalisa"


def test_get_issue_graphql_error(monkeypatch: MonkeyPatch) -> None:
    responses = [
        {
            "data": {"repository": {"hasIssuesEnabled": True, "issue": None}},
            "errors": [
                {
                    "type": "NOT_FOUND",
                    "message": "Could not resolve to an Issue with the number of 999.",
                }
            ],
        }
    ]

    with mock_subprocess_run(monkeypatch, _graphql_recorder(responses, [], [])):
        with pytest.raises(RuntimeError, match="Could not resolve to an Issue"):
            RealGitHubIssues().get_issue(REPO, 999)


def test_graphql_failure_without_json(monkeypatch: MonkeyPatch) -> None:
    def mock_run(cmd: list[str], **kwargs) -> subprocess.CompletedProcess:
        return completed(cmd, returncode=1, stderr="HTTP 401: Bad credentials")

    with mock_subprocess_run(monkeypatch, mock_run):
        with pytest.raises(RuntimeError, match="Bad credentials"):
            RealGitHubIssues().get_repo(REPO)


def test_gh_not_installed(monkeypatch: MonkeyPatch) -> None:
    def mock_run(cmd: list[str], **kwargs) -> subprocess.CompletedProcess:
        raise FileNotFoundError("gh")

    with mock_subprocess_run(monkeypatch, mock_run):
        with pytest.raises(RuntimeError, match="Command not found: gh"):
            RealGitHubIssues().get_repo(REPO)


def test_get_repo(monkeypatch: MonkeyPatch) -> None:
    responses = [
        {
            "data": {
                "repository": {
                    "id": "R_1",
                    "nameWithOwner": "octo/hello",
                    "hasIssuesEnabled": True,
                    "viewerPermission": "TRIAGE",
                }
            }
        }
    ]

    with mock_subprocess_run(monkeypatch, _graphql_recorder(responses, [], [])):
        info = RealGitHubIssues().get_repo(REPO)

    assert info.id == "R_1"
    assert info.viewer_can_triage


def test_create_issue_sends_only_set_ids(monkeypatch: MonkeyPatch) -> None:
    payloads: list[dict[str, Any]] = []
    responses = [
        {
            "data": {
                "createIssue": {
                    "issue": {"number": 42, "url": "https://github.com/octo/hello/issues/42"}
                }
            }
        }
    ]

    with mock_subprocess_run(monkeypatch, _graphql_recorder(responses, payloads, [])):
        result = RealGitHubIssues().create_issue(
            REPO,
            "R_1",
            IssueCreateParams(title="T", body="B", label_ids=["L_bug"], milestone_id="M_1"),
        )

    assert result.number == 42
    assert result.url == "https://github.com/octo/hello/issues/42"
    assert payloads[0]["variables"]["input"] == {
        "repositoryId": "R_1",
        "title": "T",
        "body": "B",
        "labelIds": ["L_bug"],
        "milestoneId": "M_1",
    }


def test_close_and_reopen_use_issue_id(monkeypatch: MonkeyPatch) -> None:
    payloads: list[dict[str, Any]] = []
    responses = [
        {"data": {"closeIssue": {"issue": {"id": "I_5"}}}},
        {"data": {"reopenIssue": {"issue": {"id": "I_5"}}}},
    ]
    issue = create_test_issue(5)

    with mock_subprocess_run(monkeypatch, _graphql_recorder(responses, payloads, [])):
        issues = RealGitHubIssues()
        issues.close_issue(REPO, issue)
        issues.reopen_issue(REPO, issue)

    assert "closeIssue" in payloads[0]["query"]
    assert "reopenIssue" in payloads[1]["query"]
    assert payloads[0]["variables"] == {"input": {"issueId": "I_5"}}


def test_get_current_username(monkeypatch: MonkeyPatch) -> None:
    def mock_run(cmd: list[str], **kwargs) -> subprocess.CompletedProcess:
        assert cmd == ["gh", "api", "--hostname", "github.com", "user", "--jq", ".login"]
        return completed(cmd, stdout="monalisa\n")

    with mock_subprocess_run(monkeypatch, mock_run):
        assert RealGitHubIssues().get_current_username("github.com") == "monalisa"


def test_get_current_username_not_authenticated(monkeypatch: MonkeyPatch) -> None:
    def mock_run(cmd: list[str], **kwargs) -> subprocess.CompletedProcess:
        return completed(cmd, returncode=1, stderr="not logged in")

    with mock_subprocess_run(monkeypatch, mock_run):
        assert RealGitHubIssues().get_current_username("github.com") is None


def test_resolve_metadata_tolerates_missing_names(monkeypatch: MonkeyPatch) -> None:
    """Unknown names come back as null fields with NOT_FOUND errors."""
    payloads: list[dict[str, Any]] = []
    responses = [
        {
            "data": {
                "u000": {"id": "U_mona", "login": "monalisa"},
                "repository": {"l000": {"id": "L_bug", "name": "bug"}, "l001": None},
            },
            "errors": [{"type": "NOT_FOUND", "message": "Could not resolve to a Label"}],
        }
    ]

    with mock_subprocess_run(monkeypatch, _graphql_recorder(responses, payloads, [])):
        metadata = RealGitHubIssues().resolve_metadata(
            REPO, assignees=["monalisa"], labels=["bug", "nope"], projects=[], milestones=[]
        )

    query = payloads[0]["query"]
    assert 'u000: user(login: "monalisa")' in query
    assert 'l001: label(name: "nope")' in query
    assert [node.id for node in metadata.assignable_users] == ["U_mona"]
    assert [node.name for node in metadata.labels] == ["bug"]
    assert len(payloads) == 1


def test_fetch_repo_metadata_paginates_labels(monkeypatch: MonkeyPatch) -> None:
    payloads: list[dict[str, Any]] = []
    responses = [
        {
            "data": {
                "repository": {
                    "labels": {
                        "nodes": [{"id": "L_1", "name": "bug"}],
                        "pageInfo": {"hasNextPage": True, "endCursor": "c1"},
                    }
                }
            }
        },
        {
            "data": {
                "repository": {
                    "labels": {
                        "nodes": [{"id": "L_2", "name": "docs"}],
                        "pageInfo": {"hasNextPage": False, "endCursor": None},
                    }
                }
            }
        },
    ]

    with mock_subprocess_run(monkeypatch, _graphql_recorder(responses, payloads, [])):
        metadata = RealGitHubIssues().fetch_repo_metadata(REPO, RepoMetadataInput(labels=True))

    assert [node.name for node in metadata.labels] == ["bug", "docs"]
    assert metadata.assignable_users == []
    assert payloads[1]["variables"]["endCursor"] == "c1"


def _projects_page(owner_key: str, names: list[str]) -> dict[str, Any]:
    return {
        "data": {
            owner_key: {
                "projects": {
                    "nodes": [{"id": f"P_{name}", "name": name} for name in names],
                    "pageInfo": {"hasNextPage": False, "endCursor": None},
                }
            }
        }
    }


def test_fetch_projects_includes_organization_projects(monkeypatch: MonkeyPatch) -> None:
    responses = [
        _projects_page("repository", ["Roadmap"]),
        _projects_page("organization", ["Company"]),
    ]

    with mock_subprocess_run(monkeypatch, _graphql_recorder(responses, [], [])):
        metadata = RealGitHubIssues().fetch_repo_metadata(REPO, RepoMetadataInput(projects=True))

    assert [node.name for node in metadata.projects] == ["Roadmap", "Company"]


def test_fetch_projects_skips_missing_organization(monkeypatch: MonkeyPatch) -> None:
    """A user-owned repository still returns its own projects."""
    # Arrange
    payloads: list[dict[str, Any]] = []
    responses = [
        _projects_page("repository", ["Roadmap"]),
        {
            "data": {"organization": None},
            "errors": [
                {
                    "type": "NOT_FOUND",
                    "message": "Could not resolve to an Organization with the login of 'octo'.",
                }
            ],
        },
    ]

    # Act
    with mock_subprocess_run(monkeypatch, _graphql_recorder(responses, payloads, [])):
        metadata = RealGitHubIssues().fetch_repo_metadata(REPO, RepoMetadataInput(projects=True))

    # Assert
    assert [(node.name, node.id) for node in metadata.projects] == [("Roadmap", "P_Roadmap")]
    assert payloads[1]["variables"]["owner"] == "octo"


def test_fetch_projects_propagates_other_errors(monkeypatch: MonkeyPatch) -> None:
    responses = [
        _projects_page("repository", ["Roadmap"]),
        {
            "data": {"organization": None},
            "errors": [
                {
                    "type": "FORBIDDEN",
                    "message": "Resource not accessible by integration",
                }
            ],
        },
    ]

    with mock_subprocess_run(monkeypatch, _graphql_recorder(responses, [], [])):
        with pytest.raises(RuntimeError, match="Resource not accessible by integration"):
            RealGitHubIssues().fetch_repo_metadata(REPO, RepoMetadataInput(projects=True))


def test_get_issue_status_parses_sections(monkeypatch: MonkeyPatch) -> None:
    """Each section keeps its own issues and server-side total."""
    # Arrange
    payloads: list[dict[str, Any]] = []
    responses = [
        {
            "data": {
                "repository": {
                    "hasIssuesEnabled": True,
                    "assigned": {"totalCount": 3, "nodes": [_issue_node(1), _issue_node(2)]},
                    "mentioned": {"totalCount": 0, "nodes": []},
                    "authored": {"totalCount": 1, "nodes": [_issue_node(7)]},
                }
            }
        }
    ]

    # Act
    with mock_subprocess_run(monkeypatch, _graphql_recorder(responses, payloads, [])):
        status = RealGitHubIssues().get_issue_status(REPO, "monalisa")

    # Assert
    assert [issue.number for issue in status.assigned.issues] == [1, 2]
    assert status.assigned.total_count == 3
    assert status.mentioned.issues == []
    assert status.mentioned.total_count == 0
    assert [issue.number for issue in status.authored.issues] == [7]
    assert status.authored.total_count == 1
    assert payloads[0]["variables"] == {"owner": "octo", "repo": "hello", "viewer": "monalisa"}


def test_get_issue_status_disabled_repository(monkeypatch: MonkeyPatch) -> None:
    responses = [{"data": {"repository": {"hasIssuesEnabled": False}}}]

    with mock_subprocess_run(monkeypatch, _graphql_recorder(responses, [], [])):
        with pytest.raises(RuntimeError, match="'octo/hello' repository has disabled issues"):
            RealGitHubIssues().get_issue_status(REPO, "monalisa")
