"""In-memory fake implementation of GitHub operations for testing."""

from typing import TypeVar

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

IssueKey = tuple[str, str, int]


def _paginate(items: list[T], cursor: str | None, page_size: int) -> Page[T]:
    start = int(cursor) if cursor else 0
    end = start + page_size
    has_next = end < len(items)
    return Page(
        nodes=items[start:end],
        has_next_page=has_next,
        end_cursor=str(end) if has_next else None,
    )


class FakeGitHub(GitHub):
    """In-memory fake implementation for testing.

    All state is provided via constructor using keyword arguments. Mutations
    update the in-memory state (so later reads observe them) and are tracked
    for assertions.
    """

    def __init__(
        self,
        *,
        projects: dict[tuple[ProjectScope, str], list[ProjectRef]] | None = None,
        project_fields: dict[str, list[ProjectField]] | None = None,
        issues: dict[IssueKey, IssueInfo] | None = None,
        issue_items: dict[IssueKey, list[ProjectItemRef]] | None = None,
        item_values: dict[str, list[FieldValue]] | None = None,
        errors: dict[str, list[Exception]] | None = None,
        page_size: int = 50,
        next_item_number: int = 1,
    ) -> None:
        """Create FakeGitHub with pre-configured state.

        Args:
            projects: Mapping of (scope, owner) -> projects visible in that scope
            project_fields: Mapping of project id -> fields
            issues: Mapping of (owner, repo, number) -> IssueInfo
            issue_items: Mapping of (owner, repo, number) -> project item links
            item_values: Mapping of project item id -> single-select values
            errors: Mapping of method name -> exceptions raised, in order, by
                the next calls to that method
            page_size: Page size for every paginated method
            next_item_number: Number used for the next created item id
        """
        self._projects = projects or {}
        self._project_fields = project_fields or {}
        self._issues = issues or {}
        self._issue_items = {key: list(items) for key, items in (issue_items or {}).items()}
        self._item_values = {key: list(values) for key, values in (item_values or {}).items()}
        self._errors = {key: list(queue) for key, queue in (errors or {}).items()}
        self._page_size = page_size
        self._next_item_number = next_item_number
        self._call_counts: dict[str, int] = {}
        self._created_items: list[tuple[str, str]] = []
        self._status_updates: list[tuple[str, str, str, str]] = []
        self._added_labels: list[tuple[IssueKey, list[str]]] = []
        self._removed_labels: list[tuple[IssueKey, str]] = []
        self._comments: list[tuple[IssueKey, str]] = []
        self._added_assignees: list[tuple[IssueKey, list[str]]] = []

    @property
    def call_counts(self) -> dict[str, int]:
        """Read-only access to per-method call counts (including failed calls)."""
        return self._call_counts

    @property
    def created_items(self) -> list[tuple[str, str]]:
        """Returns list of (project_id, content_id) tuples."""
        return self._created_items

    @property
    def status_updates(self) -> list[tuple[str, str, str, str]]:
        """Returns list of (project_id, item_id, field_id, option_id) tuples."""
        return self._status_updates

    @property
    def added_labels(self) -> list[tuple[IssueKey, list[str]]]:
        return self._added_labels

    @property
    def removed_labels(self) -> list[tuple[IssueKey, str]]:
        return self._removed_labels

    @property
    def comments(self) -> list[tuple[IssueKey, str]]:
        """Returns list of ((owner, repo, number), body) tuples."""
        return self._comments

    @property
    def added_assignees(self) -> list[tuple[IssueKey, list[str]]]:
        return self._added_assignees

    def _record_call(self, method: str) -> None:
        self._call_counts[method] = self._call_counts.get(method, 0) + 1
        queue = self._errors.get(method)
        if queue:
            raise queue.pop(0)

    def get_project_by_number(
        self, owner: str, scope: ProjectScope, number: int
    ) -> ProjectRef | None:
        self._record_call("get_project_by_number")
        for project in self._projects.get((scope, owner), []):
            if project.number == number:
                return project
        return None

    def list_projects(
        self, owner: str, scope: ProjectScope, search: str, cursor: str | None
    ) -> Page[ProjectRef]:
        self._record_call("list_projects")
        matching = [
            project
            for project in self._projects.get((scope, owner), [])
            if search.lower() in project.title.lower()
        ]
        return _paginate(matching, cursor, self._page_size)

    def list_project_fields(self, project_id: str, cursor: str | None) -> Page[ProjectField]:
        self._record_call("list_project_fields")
        return _paginate(self._project_fields.get(project_id, []), cursor, self._page_size)

    def list_issue_project_items(
        self, owner: str, repo: str, number: int, cursor: str | None
    ) -> Page[ProjectItemRef]:
        self._record_call("list_issue_project_items")
        items = self._issue_items.get((owner, repo, number), [])
        return _paginate(items, cursor, self._page_size)

    def add_project_item(self, project_id: str, content_id: str) -> str:
        self._record_call("add_project_item")
        item_id = f"PVTI_{self._next_item_number}"
        self._next_item_number += 1
        self._created_items.append((project_id, content_id))

        for key, issue in self._issues.items():
            if issue.node_id == content_id:
                self._issue_items.setdefault(key, []).append(
                    ProjectItemRef(item_id=item_id, project_id=project_id)
                )
        return item_id

    def get_item_field_values(self, item_id: str) -> list[FieldValue]:
        self._record_call("get_item_field_values")
        return list(self._item_values.get(item_id, []))

    def update_item_status(
        self, project_id: str, item_id: str, field_id: str, option_id: str
    ) -> None:
        self._record_call("update_item_status")
        self._status_updates.append((project_id, item_id, field_id, option_id))

        for field in self._project_fields.get(project_id, []):
            if field.id != field_id:
                continue
            for option_name, candidate_id in field.options.items():
                if candidate_id == option_id:
                    values = [
                        value
                        for value in self._item_values.get(item_id, [])
                        if value.field_name != field.name
                    ]
                    values.append(FieldValue(field_name=field.name, value_name=option_name))
                    self._item_values[item_id] = values

    def get_issue(self, owner: str, repo: str, number: int) -> IssueInfo:
        self._record_call("get_issue")
        key = (owner, repo, number)
        if key not in self._issues:
            msg = f"Failed to get issue {owner}/{repo}#{number}: Not Found (HTTP 404)"
            raise GitHubAPIError(msg, status=404)
        return self._issues[key]

    def add_labels(self, owner: str, repo: str, number: int, labels: list[str]) -> None:
        self._record_call("add_labels")
        self._added_labels.append(((owner, repo, number), list(labels)))

    def remove_label(self, owner: str, repo: str, number: int, label: str) -> None:
        self._record_call("remove_label")
        self._removed_labels.append(((owner, repo, number), label))

    def create_comment(self, owner: str, repo: str, number: int, body: str) -> None:
        self._record_call("create_comment")
        self._comments.append(((owner, repo, number), body))

    def add_assignees(self, owner: str, repo: str, number: int, assignees: list[str]) -> None:
        self._record_call("add_assignees")
        self._added_assignees.append(((owner, repo, number), list(assignees)))
