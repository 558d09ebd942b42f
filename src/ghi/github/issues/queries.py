"""GraphQL documents used by RealGitHubIssues."""

ISSUE_LIST_FIELDS = """
fragment issueListItem on Issue {
  id
  number
  title
  body
  state
  url
  createdAt
  updatedAt
  author { login }
  comments { totalCount }
  assignees(first: 100) { nodes { login } totalCount }
  labels(first: 100) { nodes { name } totalCount }
  milestone { title }
}
"""

ISSUE_DETAIL_FIELDS = """
fragment issueDetail on Issue {
  id
  number
  title
  body
  state
  url
  createdAt
  updatedAt
  author { login }
  comments { totalCount }
  assignees(first: 100) { nodes { login } totalCount }
  labels(first: 100) { nodes { name } totalCount }
  projectCards(first: 100) { nodes { project { name } column { name } } totalCount }
  milestone { title }
}
"""

REPOSITORY_INFO = """
query RepositoryInfo($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    id
    nameWithOwner
    hasIssuesEnabled
    viewerPermission
  }
}
"""

ISSUE_LIST = (
    """
query IssueList(
  $owner: String!, $repo: String!, $limit: Int, $endCursor: String,
  $states: [IssueState!] = OPEN, $labels: [String!], $assignee: String,
  $author: String, $mention: String, $milestone: String
) {
  repository(owner: $owner, name: $repo) {
    hasIssuesEnabled
    issues(
      first: $limit, after: $endCursor,
      orderBy: {field: CREATED_AT, direction: DESC},
      states: $states, labels: $labels,
      filterBy: {assignee: $assignee, createdBy: $author, mentioned: $mention, milestone: $milestone}
    ) {
      totalCount
      nodes { ...issueListItem }
      pageInfo { hasNextPage endCursor }
    }
  }
}
"""
    + ISSUE_LIST_FIELDS
)

ISSUE_STATUS = (
    """
query IssueStatus($owner: String!, $repo: String!, $viewer: String!, $per_page: Int = 10) {
  repository(owner: $owner, name: $repo) {
    hasIssuesEnabled
    assigned: issues(
      filterBy: {assignee: $viewer, states: OPEN}, first: $per_page,
      orderBy: {field: UPDATED_AT, direction: DESC}
    ) {
      totalCount
      nodes { ...issueListItem }
    }
    mentioned: issues(
      filterBy: {mentioned: $viewer, states: OPEN}, first: $per_page,
      orderBy: {field: UPDATED_AT, direction: DESC}
    ) {
      totalCount
      nodes { ...issueListItem }
    }
    authored: issues(
      filterBy: {createdBy: $viewer, states: OPEN}, first: $per_page,
      orderBy: {field: UPDATED_AT, direction: DESC}
    ) {
      totalCount
      nodes { ...issueListItem }
    }
  }
}
"""
    + ISSUE_LIST_FIELDS
)

ISSUE_BY_NUMBER = (
    """
query IssueByNumber($owner: String!, $repo: String!, $number: Int!) {
  repository(owner: $owner, name: $repo) {
    hasIssuesEnabled
    issue(number: $number) { ...issueDetail }
  }
}
"""
    + ISSUE_DETAIL_FIELDS
)

ISSUE_CREATE = """
mutation IssueCreate($input: CreateIssueInput!) {
  createIssue(input: $input) {
    issue { number url }
  }
}
"""

ISSUE_CLOSE = """
mutation IssueClose($input: CloseIssueInput!) {
  closeIssue(input: $input) { issue { id } }
}
"""

ISSUE_REOPEN = """
mutation IssueReopen($input: ReopenIssueInput!) {
  reopenIssue(input: $input) { issue { id } }
}
"""

ASSIGNABLE_USERS = """
query RepositoryAssignableUsers($owner: String!, $name: String!, $endCursor: String) {
  repository(owner: $owner, name: $name) {
    assignableUsers(first: 100, after: $endCursor) {
      nodes { id login }
      pageInfo { hasNextPage endCursor }
    }
  }
}
"""

LABELS = """
query RepositoryLabelList($owner: String!, $name: String!, $endCursor: String) {
  repository(owner: $owner, name: $name) {
    labels(first: 100, after: $endCursor) {
      nodes { id name }
      pageInfo { hasNextPage endCursor }
    }
  }
}
"""

REPO_PROJECTS = """
query RepositoryProjectList($owner: String!, $name: String!, $endCursor: String) {
  repository(owner: $owner, name: $name) {
    projects(first: 100, after: $endCursor, states: [OPEN]) {
      nodes { id name }
      pageInfo { hasNextPage endCursor }
    }
  }
}
"""

ORG_PROJECTS = """
query OrganizationProjectList($owner: String!, $endCursor: String) {
  organization(login: $owner) {
    projects(first: 100, after: $endCursor, states: [OPEN]) {
      nodes { id name }
      pageInfo { hasNextPage endCursor }
    }
  }
}
"""

MILESTONES = """
query RepositoryMilestoneList($owner: String!, $name: String!, $endCursor: String) {
  repository(owner: $owner, name: $name) {
    milestones(first: 100, after: $endCursor, states: [OPEN]) {
      nodes { id title }
      pageInfo { hasNextPage endCursor }
    }
  }
}
"""
