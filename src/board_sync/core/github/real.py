"""Real GitHub implementation using the gh CLI.

GraphQL documents go through `gh api graphql`, per-entity operations through
`gh api repos/...`. Authentication is whatever gh is configured with (in
Actions, the GH_TOKEN environment variable).
"""

import json
import re
import subprocess
from typing import Any, TypeVar
from urllib.parse import quote

from board_sync.core.errors import GitHubAPIError
from board_sync.core.github.abc import GitHub
from board_sync.core.github.types import (
    FieldValue,
    IssueInfo,
    Page,
    ProjectField,
    ProjectItemRef,
    ProjectRef,
    ProjectScope,
)

T = TypeVar("T")

PAGE_SIZE = 50

_HTTP_STATUS_PATTERN = re.compile(r"\(HTTP (\d{3})\)")

_PROJECT_BY_NUMBER_QUERY = """
query($owner: String!, $number: Int!) {
  %(scope)s(login: $owner) {
    projectV2(number: $number) { id title number }
  }
}
"""

_PROJECTS_QUERY = """
query($owner: String!, $search: String!, $cursor: String) {
  %(scope)s(login: $owner) {
    projectsV2(first: %(page_size)d, after: $cursor, query: $search) {
      nodes { id title number }
      pageInfo { hasNextPage endCursor }
    }
  }
}
"""

_PROJECT_FIELDS_QUERY = """
query($projectId: ID!, $cursor: String) {
  node(id: $projectId) {
    ... on ProjectV2 {
      fields(first: %(page_size)d, after: $cursor) {
        nodes {
          ... on ProjectV2FieldCommon { id name }
          ... on ProjectV2SingleSelectField { options { id name } }
        }
        pageInfo { hasNextPage endCursor }
      }
    }
  }
}
"""

_ISSUE_PROJECT_ITEMS_QUERY = """
query($owner: String!, $repo: String!, $number: Int!, $cursor: String) {
  repository(owner: $owner, name: $repo) {
    issue(number: $number) {
      projectItems(first: %(page_size)d, after: $cursor) {
        nodes { id project { id } }
        pageInfo { hasNextPage endCursor }
      }
    }
  }
}
"""

_ADD_PROJECT_ITEM_MUTATION = """
mutation($projectId: ID!, $contentId: ID!) {
  addProjectV2ItemById(input: { projectId: $projectId, contentId: $contentId }) {
    item { id }
  }
}
"""

_ITEM_FIELD_VALUES_QUERY = """
query($itemId: ID!) {
  node(id: $itemId) {
    ... on ProjectV2Item {
      fieldValues(first: 100) {
        nodes {
          ... on ProjectV2ItemFieldSingleSelectValue {
            name
            field { ... on ProjectV2SingleSelectField { name } }
          }
        }
      }
    }
  }
}
"""

_UPDATE_ITEM_STATUS_MUTATION = """
mutation($projectId: ID!, $itemId: ID!, $fieldId: ID!, $optionId: String!) {
  updateProjectV2ItemFieldValue(
    input: {
      projectId: $projectId
      itemId: $itemId
      fieldId: $fieldId
      value: { singleSelectOptionId: $optionId }
    }
  ) {
    projectV2Item { id }
  }
}
"""


def parse_http_status(stderr: str) -> int | None:
    """Extract the HTTP status gh reports as "(HTTP 403)" in its error output."""
    match = _HTTP_STATUS_PATTERN.search(stderr)
    if match is None:
        return None
    return int(match.group(1))


def _run_gh_api(args: list[str], operation: str) -> subprocess.CompletedProcess[str]:
    """Run `gh api` with args, returning the completed process even on failure.

    Raises:
        GitHubAPIError: If gh is not installed
    """
    cmd = ["gh", "api", *args]
    try:
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=False,
        )
    except FileNotFoundError as e:
        msg = f"Command not found while trying to {operation}: gh"
        raise GitHubAPIError(msg) from e


def _error_from_result(
    result: subprocess.CompletedProcess[str], operation: str
) -> GitHubAPIError:
    detail = result.stderr.strip() or result.stdout.strip()
    msg = f"Failed to {operation}"
    if detail:
        msg += f": {detail}"
    return GitHubAPIError(msg, status=parse_http_status(result.stderr))


def _page_from_connection(connection: dict[str, Any] | None, nodes: list[T]) -> Page[T]:
    if connection is None:
        return Page(nodes=nodes)
    page_info = connection.get("pageInfo") or {}
    return Page(
        nodes=nodes,
        has_next_page=bool(page_info.get("hasNextPage")),
        end_cursor=page_info.get("endCursor"),
    )


class RealGitHub(GitHub):
    """Production implementation using the gh CLI.

    All GitHub operations execute actual gh commands via subprocess.
    """

    def _rest(self, args: list[str], operation: str) -> str:
        result = _run_gh_api(args, operation)
        if result.returncode != 0:
            raise _error_from_result(result, operation)
        return result.stdout

    def _graphql(
        self,
        query: str,
        variables: dict[str, str | int | None],
        operation: str,
        *,
        allow_not_found: bool = False,
    ) -> dict[str, Any]:
        """Execute a GraphQL document and return its "data" object.

        Args:
            query: GraphQL query or mutation document
            variables: Variables; None values are omitted (GraphQL null)
            operation: Human-readable description used in error messages
            allow_not_found: If True, NOT_FOUND errors (e.g. a login that is a
                user rather than an organization) yield partial data instead
                of raising
        """
        args = ["graphql", "-f", f"query={query}"]
        for name, value in variables.items():
            if value is None:
                continue
            # -F lets gh send integers as JSON numbers; -f always sends strings
            flag = "-F" if isinstance(value, int) else "-f"
            args.extend([flag, f"{name}={value}"])

        result = _run_gh_api(args, operation)

        payload: dict[str, Any] | None = None
        if result.stdout.strip():
            try:
                payload = json.loads(result.stdout)
            except json.JSONDecodeError:
                payload = None

        errors = payload.get("errors") if payload is not None else None
        if payload is not None and errors:
            if allow_not_found and all(error.get("type") == "NOT_FOUND" for error in errors):
                return payload.get("data") or {}
            messages = "; ".join(str(error.get("message", "")) for error in errors)
            raise GitHubAPIError(
                f"Failed to {operation}: {messages}",
                status=parse_http_status(result.stderr),
            )

        if result.returncode != 0:
            raise _error_from_result(result, operation)

        if payload is None:
            msg = f"Failed to {operation}: response was not valid JSON"
            raise GitHubAPIError(msg)
        return payload.get("data") or {}

    def get_project_by_number(
        self, owner: str, scope: ProjectScope, number: int
    ) -> ProjectRef | None:
        data = self._graphql(
            _PROJECT_BY_NUMBER_QUERY % {"scope": scope},
            {"owner": owner, "number": number},
            f"look up project #{number} for {scope} '{owner}'",
            allow_not_found=True,
        )
        node = (data.get(scope) or {}).get("projectV2")
        if not node:
            return None
        return ProjectRef(id=node["id"], title=node["title"], number=node.get("number"))

    def list_projects(
        self, owner: str, scope: ProjectScope, search: str, cursor: str | None
    ) -> Page[ProjectRef]:
        data = self._graphql(
            _PROJECTS_QUERY % {"scope": scope, "page_size": PAGE_SIZE},
            {"owner": owner, "search": search, "cursor": cursor},
            f"list projects for {scope} '{owner}'",
            allow_not_found=True,
        )
        connection = (data.get(scope) or {}).get("projectsV2")
        if connection is None:
            return Page(nodes=[])
        projects = [
            ProjectRef(id=node["id"], title=node["title"], number=node.get("number"))
            for node in connection.get("nodes") or []
            if node
        ]
        return _page_from_connection(connection, projects)

    def list_project_fields(self, project_id: str, cursor: str | None) -> Page[ProjectField]:
        data = self._graphql(
            _PROJECT_FIELDS_QUERY % {"page_size": PAGE_SIZE},
            {"projectId": project_id, "cursor": cursor},
            f"list fields of project {project_id}",
        )
        connection = (data.get("node") or {}).get("fields")
        if connection is None:
            return Page(nodes=[])
        fields = [
            ProjectField(
                id=node["id"],
                name=node["name"],
                options={option["name"]: option["id"] for option in node.get("options") or []},
            )
            for node in connection.get("nodes") or []
            if node and "id" in node
        ]
        return _page_from_connection(connection, fields)

    def list_issue_project_items(
        self, owner: str, repo: str, number: int, cursor: str | None
    ) -> Page[ProjectItemRef]:
        data = self._graphql(
            _ISSUE_PROJECT_ITEMS_QUERY % {"page_size": PAGE_SIZE},
            {"owner": owner, "repo": repo, "number": number, "cursor": cursor},
            f"list project items of {owner}/{repo}#{number}",
        )
        issue = (data.get("repository") or {}).get("issue")
        if issue is None:
            msg = f"Failed to list project items: issue {owner}/{repo}#{number} not found"
            raise GitHubAPIError(msg, status=404)
        connection = issue.get("projectItems")
        items = [
            ProjectItemRef(item_id=node["id"], project_id=(node.get("project") or {}).get("id", ""))
            for node in (connection or {}).get("nodes") or []
            if node
        ]
        return _page_from_connection(connection, items)

    def add_project_item(self, project_id: str, content_id: str) -> str:
        data = self._graphql(
            _ADD_PROJECT_ITEM_MUTATION,
            {"projectId": project_id, "contentId": content_id},
            f"add {content_id} to project {project_id}",
        )
        item = (data.get("addProjectV2ItemById") or {}).get("item") or {}
        return item.get("id") or ""

    def get_item_field_values(self, item_id: str) -> list[FieldValue]:
        data = self._graphql(
            _ITEM_FIELD_VALUES_QUERY,
            {"itemId": item_id},
            f"read field values of project item {item_id}",
        )
        nodes = ((data.get("node") or {}).get("fieldValues") or {}).get("nodes") or []
        values: list[FieldValue] = []
        for node in nodes:
            # Non single-select values come back as empty objects
            if not node or not node.get("name"):
                continue
            field_name = (node.get("field") or {}).get("name")
            if field_name:
                values.append(FieldValue(field_name=field_name, value_name=node["name"]))
        return values

    def update_item_status(
        self, project_id: str, item_id: str, field_id: str, option_id: str
    ) -> None:
        self._graphql(
            _UPDATE_ITEM_STATUS_MUTATION,
            {
                "projectId": project_id,
                "itemId": item_id,
                "fieldId": field_id,
                "optionId": option_id,
            },
            f"update status of project item {item_id}",
        )

    def get_issue(self, owner: str, repo: str, number: int) -> IssueInfo:
        stdout = self._rest(
            [f"repos/{owner}/{repo}/issues/{number}"],
            f"get issue {owner}/{repo}#{number}",
        )
        data = json.loads(stdout)
        return IssueInfo(
            owner=owner,
            repo=repo,
            number=number,
            node_id=data["node_id"],
            url=data["html_url"],
            assignees=[
                assignee["login"]
                for assignee in data.get("assignees") or []
                if assignee.get("login")
            ],
        )

    def add_labels(self, owner: str, repo: str, number: int, labels: list[str]) -> None:
        args = ["--method", "POST", f"repos/{owner}/{repo}/issues/{number}/labels"]
        for label in labels:
            args.extend(["-f", f"labels[]={label}"])
        self._rest(args, f"add labels to {owner}/{repo}#{number}")

    def remove_label(self, owner: str, repo: str, number: int, label: str) -> None:
        self._rest(
            [
                "--method",
                "DELETE",
                f"repos/{owner}/{repo}/issues/{number}/labels/{quote(label, safe='')}",
            ],
            f"remove label '{label}' from {owner}/{repo}#{number}",
        )

    def create_comment(self, owner: str, repo: str, number: int, body: str) -> None:
        self._rest(
            [
                "--method",
                "POST",
                f"repos/{owner}/{repo}/issues/{number}/comments",
                "-f",
                f"body={body}",
            ],
            f"comment on {owner}/{repo}#{number}",
        )

    def add_assignees(self, owner: str, repo: str, number: int, assignees: list[str]) -> None:
        args = ["--method", "POST", f"repos/{owner}/{repo}/issues/{number}/assignees"]
        for login in assignees:
            args.extend(["-f", f"assignees[]={login}"])
        self._rest(args, f"assign {', '.join(assignees)} to {owner}/{repo}#{number}")
