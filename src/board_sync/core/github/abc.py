"""Abstract base class for GitHub operations."""

from abc import ABC, abstractmethod

from board_sync.core.github.types import (
    FieldValue,
    IssueInfo,
    Page,
    ProjectField,
    ProjectItemRef,
    ProjectRef,
    ProjectScope,
)


class GitHub(ABC):
    """Abstract interface for GitHub operations.

    All implementations (real, fake, and wrappers) must implement this interface.
    Paginated lookups return a single Page; walking the cursor is left to the
    caller so pagination rules live in one place.

    Failures raise GitHubAPIError.
    """

    @abstractmethod
    def get_project_by_number(
        self, owner: str, scope: ProjectScope, number: int
    ) -> ProjectRef | None:
        """Look up a project by number under one owner scope.

        Args:
            owner: Organization or user login
            scope: "organization" or "user"
            number: Project number as shown in the project URL

        Returns:
            ProjectRef, or None if the owner does not exist in this scope or has
            no project with this number
        """
        ...

    @abstractmethod
    def list_projects(
        self, owner: str, scope: ProjectScope, search: str, cursor: str | None
    ) -> Page[ProjectRef]:
        """List one page of an owner's projects filtered by search text.

        Returns an empty page when the owner does not exist in this scope.
        """
        ...

    @abstractmethod
    def list_project_fields(self, project_id: str, cursor: str | None) -> Page[ProjectField]:
        """List one page of a project's fields, including single-select options."""
        ...

    @abstractmethod
    def list_issue_project_items(
        self, owner: str, repo: str, number: int, cursor: str | None
    ) -> Page[ProjectItemRef]:
        """List one page of the project items that link to an issue."""
        ...

    @abstractmethod
    def add_project_item(self, project_id: str, content_id: str) -> str:
        """Add an issue (by node id) to a project.

        Returns:
            The new project item id (empty string if the API returned none)
        """
        ...

    @abstractmethod
    def get_item_field_values(self, item_id: str) -> list[FieldValue]:
        """Get the single-select values currently set on a project item."""
        ...

    @abstractmethod
    def update_item_status(
        self, project_id: str, item_id: str, field_id: str, option_id: str
    ) -> None:
        """Set a single-select field value on a project item."""
        ...

    @abstractmethod
    def get_issue(self, owner: str, repo: str, number: int) -> IssueInfo:
        """Fetch an issue's node id, URL and assignees."""
        ...

    @abstractmethod
    def add_labels(self, owner: str, repo: str, number: int, labels: list[str]) -> None:
        """Add labels to an issue or pull request."""
        ...

    @abstractmethod
    def remove_label(self, owner: str, repo: str, number: int, label: str) -> None:
        """Remove a label from an issue or pull request.

        Raises:
            GitHubAPIError: status 404 when the label is not on the target
        """
        ...

    @abstractmethod
    def create_comment(self, owner: str, repo: str, number: int, body: str) -> None:
        """Post a comment on an issue or pull request."""
        ...

    @abstractmethod
    def add_assignees(self, owner: str, repo: str, number: int, assignees: list[str]) -> None:
        """Add assignees to an issue.

        Raises:
            GitHubAPIError: status 422 when a login cannot be assigned
        """
        ...
