"""Production implementation of GitHub issues using gh CLI."""

import json
import logging
import subprocess
from datetime import datetime
from typing import Any

from ghi.github.issues import queries
from ghi.github.issues.abc import GitHubIssues
from ghi.github.issues.types import (
    CreateIssueResult,
    Issue,
    IssueCreateParams,
    IssueListResult,
    IssueStatusResult,
    NamedNode,
    ProjectCard,
    RepoInfo,
    RepoMetadata,
    RepoMetadataInput,
)
from ghi.github.repo import RepoRef
from ghi.github.urls import FilterOptions
from ghi.subprocess_utils import execute_gh_command, run_gh_command

logger = logging.getLogger(__name__)

PAGE_SIZE = 100

_STATES_FOR_FILTER = {
    "open": ["OPEN"],
    "closed": ["CLOSED"],
    "all": ["OPEN", "CLOSED"],
}


def _parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _parse_issue(data: dict[str, Any]) -> Issue:
    assignees = data.get("assignees") or {}
    labels = data.get("labels") or {}
    project_cards = data.get("projectCards") or {}
    milestone = data.get("milestone")
    author = data.get("author")

    return Issue(
        id=data["id"],
        number=data["number"],
        title=data["title"],
        body=data.get("body") or "",
        state=data["state"],
        url=data["url"],
        author=author["login"] if author else "ghost",
        created_at=_parse_timestamp(data["createdAt"]),
        updated_at=_parse_timestamp(data["updatedAt"]),
        assignees=[node["login"] for node in assignees.get("nodes", [])],
        labels=[node["name"] for node in labels.get("nodes", [])],
        project_cards=[
            ProjectCard(
                project_name=node["project"]["name"],
                column_name=(node.get("column") or {}).get("name", ""),
            )
            for node in project_cards.get("nodes", [])
        ],
        milestone=milestone["title"] if milestone else None,
        comments_count=(data.get("comments") or {}).get("totalCount", 0),
        assignees_total=assignees.get("totalCount"),
        labels_total=labels.get("totalCount"),
        project_cards_total=project_cards.get("totalCount"),
    )


def _parse_issue_connection(connection: dict[str, Any]) -> IssueListResult:
    return IssueListResult(
        issues=[_parse_issue(node) for node in connection.get("nodes", [])],
        total_count=connection.get("totalCount", 0),
    )


def _disabled_issues_error(repo: RepoRef) -> RuntimeError:
    return RuntimeError(f"the '{repo.full_name}' repository has disabled issues")


class RealGitHubIssues(GitHubIssues):
    """Production implementation using gh CLI.

    Reads and mutations go through `gh api graphql`, so gh owns
    authentication for every host.
    """

    def _graphql(
        self,
        host: str,
        query: str,
        variables: dict[str, Any],
        *,
        allow_not_found: bool = False,
    ) -> dict[str, Any]:
        """Run a GraphQL document and return its `data` object.

        Args:
            allow_not_found: Return partial data when every error is a
                NOT_FOUND lookup failure (null fields in the data)

        Raises:
            RuntimeError: If gh fails or the response carries GraphQL errors
        """
        payload = json.dumps({"query": query, "variables": variables})
        cmd = ["gh", "api", "graphql", "--hostname", host, "--input", "-"]
        result = run_gh_command(cmd, stdin_input=payload)

        try:
            response = json.loads(result.stdout) if result.stdout.strip() else None
        except json.JSONDecodeError:
            response = None

        if not isinstance(response, dict):
            message = result.stderr.strip() or f"gh exited with status {result.returncode}"
            raise RuntimeError(f"GraphQL request failed: {message}")

        errors = response.get("errors") or []
        if errors:
            only_not_found = all(error.get("type") == "NOT_FOUND" for error in errors)
            if not (allow_not_found and only_not_found and response.get("data") is not None):
                messages = "; ".join(error.get("message", "unknown error") for error in errors)
                raise RuntimeError(f"GraphQL: {messages}")
            logger.debug("Ignoring %d NOT_FOUND errors", len(errors))
        elif result.returncode != 0:
            raise RuntimeError(f"GraphQL request failed: {result.stderr.strip()}")

        return response["data"]

    def _paginate_nodes(
        self,
        repo: RepoRef,
        query: str,
        variables: dict[str, Any],
        owner_key: str,
        connection_key: str,
    ) -> list[dict[str, Any]]:
        nodes: list[dict[str, Any]] = []
        end_cursor: str | None = None
        while True:
            data = self._graphql(repo.host, query, {**variables, "endCursor": end_cursor})
            connection = data[owner_key][connection_key]
            nodes.extend(connection["nodes"])
            if not connection["pageInfo"]["hasNextPage"]:
                return nodes
            end_cursor = connection["pageInfo"]["endCursor"]

    def get_repo(self, repo: RepoRef) -> RepoInfo:
        data = self._graphql(
            repo.host, queries.REPOSITORY_INFO, {"owner": repo.owner, "name": repo.name}
        )
        repository = data["repository"]
        return RepoInfo(
            id=repository["id"],
            name_with_owner=repository["nameWithOwner"],
            has_issues_enabled=repository["hasIssuesEnabled"],
            viewer_permission=repository.get("viewerPermission") or "READ",
        )

    def _milestone_number(self, repo: RepoRef, title: str) -> str:
        """Map a milestone title to the number the issues filter expects."""
        cmd = [
            "gh",
            "api",
            "--hostname",
            repo.host,
            "--paginate",
            f"repos/{repo.owner}/{repo.name}/milestones?state=all&per_page=100",
            "--jq",
            f".[] | select(.title == {json.dumps(title)}) | .number",
        ]
        stdout = execute_gh_command(cmd)
        numbers = stdout.split()
        if not numbers:
            raise RuntimeError(f'no milestone found with title "{title}"')
        return numbers[0]

    def list_issues(self, repo: RepoRef, filters: FilterOptions, limit: int) -> IssueListResult:
        variables: dict[str, Any] = {
            "owner": repo.owner,
            "repo": repo.name,
            "states": _STATES_FOR_FILTER[filters.state],
        }
        if filters.labels:
            variables["labels"] = filters.labels
        if filters.assignee:
            variables["assignee"] = filters.assignee
        if filters.author:
            variables["author"] = filters.author
        if filters.mention:
            variables["mention"] = filters.mention
        if filters.milestone:
            variables["milestone"] = self._milestone_number(repo, filters.milestone)

        issues: list[Issue] = []
        total_count = 0
        end_cursor: str | None = None
        while len(issues) < limit:
            page_size = min(limit - len(issues), PAGE_SIZE)
            data = self._graphql(
                repo.host,
                queries.ISSUE_LIST,
                {**variables, "limit": page_size, "endCursor": end_cursor},
            )
            repository = data["repository"]
            if not repository["hasIssuesEnabled"]:
                raise _disabled_issues_error(repo)

            connection = repository["issues"]
            total_count = connection["totalCount"]
            issues.extend(_parse_issue(node) for node in connection["nodes"])
            logger.debug("Fetched %d of %d issues", len(issues), total_count)

            if not connection["pageInfo"]["hasNextPage"]:
                break
            end_cursor = connection["pageInfo"]["endCursor"]

        return IssueListResult(issues=issues[:limit], total_count=total_count)

    def get_issue_status(self, repo: RepoRef, login: str) -> IssueStatusResult:
        data = self._graphql(
            repo.host,
            queries.ISSUE_STATUS,
            {"owner": repo.owner, "repo": repo.name, "viewer": login},
        )
        repository = data["repository"]
        if not repository["hasIssuesEnabled"]:
            raise _disabled_issues_error(repo)

        return IssueStatusResult(
            assigned=_parse_issue_connection(repository["assigned"]),
            mentioned=_parse_issue_connection(repository["mentioned"]),
            authored=_parse_issue_connection(repository["authored"]),
        )

    def get_issue(self, repo: RepoRef, number: int) -> Issue:
        data = self._graphql(
            repo.host,
            queries.ISSUE_BY_NUMBER,
            {"owner": repo.owner, "repo": repo.name, "number": number},
        )
        repository = data["repository"]
        if not repository["hasIssuesEnabled"]:
            raise _disabled_issues_error(repo)
        if repository.get("issue") is None:
            raise RuntimeError(f"Issue #{number} not found in {repo.full_name}")
        return _parse_issue(repository["issue"])

    def create_issue(
        self, repo: RepoRef, repo_id: str, params: IssueCreateParams
    ) -> CreateIssueResult:
        issue_input: dict[str, Any] = {
            "repositoryId": repo_id,
            "title": params.title,
            "body": params.body,
        }
        if params.assignee_ids:
            issue_input["assigneeIds"] = params.assignee_ids
        if params.label_ids:
            issue_input["labelIds"] = params.label_ids
        if params.project_ids:
            issue_input["projectIds"] = params.project_ids
        if params.milestone_id is not None:
            issue_input["milestoneId"] = params.milestone_id

        data = self._graphql(repo.host, queries.ISSUE_CREATE, {"input": issue_input})
        created = data["createIssue"]["issue"]
        return CreateIssueResult(number=created["number"], url=created["url"])

    def close_issue(self, repo: RepoRef, issue: Issue) -> None:
        self._graphql(repo.host, queries.ISSUE_CLOSE, {"input": {"issueId": issue.id}})

    def reopen_issue(self, repo: RepoRef, issue: Issue) -> None:
        self._graphql(repo.host, queries.ISSUE_REOPEN, {"input": {"issueId": issue.id}})

    def get_current_username(self, host: str) -> str | None:
        """Get current GitHub username via gh api user.

        Returns:
            GitHub username if authenticated, None otherwise
        """
        result = subprocess.run(
            ["gh", "api", "--hostname", host, "user", "--jq", ".login"],
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def _fetch_projects(self, repo: RepoRef) -> list[NamedNode]:
        variables = {"owner": repo.owner, "name": repo.name}
        nodes = self._paginate_nodes(
            repo, queries.REPO_PROJECTS, variables, "repository", "projects"
        )
        try:
            nodes += self._paginate_nodes(
                repo, queries.ORG_PROJECTS, {"owner": repo.owner}, "organization", "projects"
            )
        except RuntimeError as e:
            # User-owned repositories have no organization projects
            if "Could not resolve to an Organization" not in str(e):
                raise
        return [NamedNode(name=node["name"], id=node["id"]) for node in nodes]

    def fetch_repo_metadata(self, repo: RepoRef, wanted: RepoMetadataInput) -> RepoMetadata:
        variables = {"owner": repo.owner, "name": repo.name}

        assignable_users: list[NamedNode] = []
        if wanted.assignees:
            nodes = self._paginate_nodes(
                repo, queries.ASSIGNABLE_USERS, variables, "repository", "assignableUsers"
            )
            assignable_users = [NamedNode(name=node["login"], id=node["id"]) for node in nodes]

        labels: list[NamedNode] = []
        if wanted.labels:
            nodes = self._paginate_nodes(repo, queries.LABELS, variables, "repository", "labels")
            labels = [NamedNode(name=node["name"], id=node["id"]) for node in nodes]

        projects = self._fetch_projects(repo) if wanted.projects else []

        milestones: list[NamedNode] = []
        if wanted.milestones:
            nodes = self._paginate_nodes(
                repo, queries.MILESTONES, variables, "repository", "milestones"
            )
            milestones = [NamedNode(name=node["title"], id=node["id"]) for node in nodes]

        logger.debug(
            "Fetched metadata: %d users, %d labels, %d projects, %d milestones",
            len(assignable_users),
            len(labels),
            len(projects),
            len(milestones),
        )
        return RepoMetadata(
            assignable_users=assignable_users,
            labels=labels,
            projects=projects,
            milestones=milestones,
        )

    def resolve_metadata(
        self,
        repo: RepoRef,
        *,
        assignees: list[str],
        labels: list[str],
        projects: list[str],
        milestones: list[str],
    ) -> RepoMetadata:
        """Resolve names with one aliased query for users and labels.

        Projects and milestones have no lookup-by-name field, so their lists
        are fetched only when names were given for them.
        """
        users: list[NamedNode] = []
        label_nodes: list[NamedNode] = []

        if assignees or labels:
            # GraphQL string literals accept JSON string escaping
            user_fields = [
                f"u{i:03d}: user(login: {json.dumps(login)}) {{ id login }}"
                for i, login in enumerate(assignees)
            ]
            label_fields = [
                f"l{i:03d}: label(name: {json.dumps(name)}) {{ id name }}"
                for i, name in enumerate(labels)
            ]
            repository_block = ""
            if label_fields:
                repository_block = (
                    f"repository(owner: {json.dumps(repo.owner)}, name: {json.dumps(repo.name)}) "
                    f"{{ {' '.join(label_fields)} }}"
                )
            query = (
                "query RepositoryResolveMetadataIDs "
                f"{{ {' '.join(user_fields)} {repository_block} }}"
            )
            data = self._graphql(repo.host, query, {}, allow_not_found=True)

            for i in range(len(assignees)):
                user = data.get(f"u{i:03d}")
                if user is not None:
                    users.append(NamedNode(name=user["login"], id=user["id"]))
            repository = data.get("repository") or {}
            for i in range(len(labels)):
                label = repository.get(f"l{i:03d}")
                if label is not None:
                    label_nodes.append(NamedNode(name=label["name"], id=label["id"]))

        rest = self.fetch_repo_metadata(
            repo,
            RepoMetadataInput(projects=bool(projects), milestones=bool(milestones)),
        )
        return RepoMetadata(
            assignable_users=users,
            labels=label_nodes,
            projects=rest.projects,
            milestones=rest.milestones,
        )
