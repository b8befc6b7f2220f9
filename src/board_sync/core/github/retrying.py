"""Retrying wrapper for GitHub operations."""

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
from board_sync.core.retry import with_retry
from board_sync.core.time.abc import Time


class RetryingGitHub(GitHub):
    """Routes every call of the wrapped implementation through with_retry.

    Production contexts always wrap RealGitHub in this class, so no remote call
    bypasses the rate-limit backoff.
    """

    def __init__(self, wrapped: GitHub, time: Time) -> None:
        """Initialize the wrapper.

        Args:
            wrapped: The GitHub implementation performing the calls
            time: Time implementation used for backoff sleeps
        """
        self._wrapped = wrapped
        self._time = time

    def get_project_by_number(
        self, owner: str, scope: ProjectScope, number: int
    ) -> ProjectRef | None:
        return with_retry(
            lambda: self._wrapped.get_project_by_number(owner, scope, number),
            "get_project_by_number",
            time=self._time,
        )

    def list_projects(
        self, owner: str, scope: ProjectScope, search: str, cursor: str | None
    ) -> Page[ProjectRef]:
        return with_retry(
            lambda: self._wrapped.list_projects(owner, scope, search, cursor),
            "list_projects",
            time=self._time,
        )

    def list_project_fields(self, project_id: str, cursor: str | None) -> Page[ProjectField]:
        return with_retry(
            lambda: self._wrapped.list_project_fields(project_id, cursor),
            "list_project_fields",
            time=self._time,
        )

    def list_issue_project_items(
        self, owner: str, repo: str, number: int, cursor: str | None
    ) -> Page[ProjectItemRef]:
        return with_retry(
            lambda: self._wrapped.list_issue_project_items(owner, repo, number, cursor),
            "list_issue_project_items",
            time=self._time,
        )

    def add_project_item(self, project_id: str, content_id: str) -> str:
        return with_retry(
            lambda: self._wrapped.add_project_item(project_id, content_id),
            "add_project_item",
            time=self._time,
        )

    def get_item_field_values(self, item_id: str) -> list[FieldValue]:
        return with_retry(
            lambda: self._wrapped.get_item_field_values(item_id),
            "get_item_field_values",
            time=self._time,
        )

    def update_item_status(
        self, project_id: str, item_id: str, field_id: str, option_id: str
    ) -> None:
        with_retry(
            lambda: self._wrapped.update_item_status(project_id, item_id, field_id, option_id),
            "update_item_status",
            time=self._time,
        )

    def get_issue(self, owner: str, repo: str, number: int) -> IssueInfo:
        return with_retry(
            lambda: self._wrapped.get_issue(owner, repo, number),
            "get_issue",
            time=self._time,
        )

    def add_labels(self, owner: str, repo: str, number: int, labels: list[str]) -> None:
        with_retry(
            lambda: self._wrapped.add_labels(owner, repo, number, labels),
            "add_labels",
            time=self._time,
        )

    def remove_label(self, owner: str, repo: str, number: int, label: str) -> None:
        with_retry(
            lambda: self._wrapped.remove_label(owner, repo, number, label),
            "remove_label",
            time=self._time,
        )

    def create_comment(self, owner: str, repo: str, number: int, body: str) -> None:
        with_retry(
            lambda: self._wrapped.create_comment(owner, repo, number, body),
            "create_comment",
            time=self._time,
        )

    def add_assignees(self, owner: str, repo: str, number: int, assignees: list[str]) -> None:
        with_retry(
            lambda: self._wrapped.add_assignees(owner, repo, number, assignees),
            "add_assignees",
            time=self._time,
        )
