"""Project lookup and status field resolution.

ProjectDirectory resolves a project board once per invocation and memoizes the
result. There is no refresh: a run trusts its first lookup, and the cache dies
with the context that owns it.
"""

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TypeVar

from board_sync.core.errors import (
    ProjectNotFoundError,
    StatusFieldNotFoundError,
    StatusOptionNotFoundError,
)
from board_sync.core.github.abc import GitHub
from board_sync.core.github.types import PROJECT_SCOPES, Page, ProjectField, ProjectRef

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectContext:
    """Resolved identifiers of a project board and its status field."""

    project_id: str
    title: str
    status_field_id: str
    status_field_name: str
    status_options: dict[str, str]  # option name -> option id

    def option_id(self, status: str) -> str:
        """Resolve a status name to its single-select option id.

        Raises:
            StatusOptionNotFoundError: If the status field has no such option
        """
        option_id = self.status_options.get(status)
        if option_id is None:
            msg = f"Status option not found: {status}"
            raise StatusOptionNotFoundError(msg)
        return option_id


def iterate_pages(fetch: Callable[[str | None], Page[T]]) -> Iterator[T]:
    """Yield every node of a cursor-paginated connection, page by page.

    Pages are fetched lazily, so stopping iteration early stops fetching.
    """
    cursor: str | None = None
    while True:
        page = fetch(cursor)
        yield from page.nodes
        if not page.has_next_page or page.end_cursor is None:
            return
        cursor = page.end_cursor


class ProjectDirectory:
    """Resolves and caches the configured project's identity and status field."""

    def __init__(self, github: GitHub) -> None:
        self._github = github
        self._cached: ProjectContext | None = None

    @property
    def cached(self) -> ProjectContext | None:
        return self._cached

    def resolve(
        self,
        owner: str,
        *,
        name: str | None,
        number: int | None,
        status_field: str,
    ) -> ProjectContext:
        """Resolve the project and its status field, using the cache when warm.

        A configured number takes precedence over a name.

        Raises:
            ProjectNotFoundError: If no project matches
            StatusFieldNotFoundError: If the project has no such field
        """
        if self._cached is not None:
            return self._cached

        project: ProjectRef | None = None
        if number is not None:
            project = self._find_by_number(owner, number)
        elif name is not None:
            project = self._find_by_title(owner, name)

        if project is None:
            msg = f"Project not found: {name if name is not None else number}"
            raise ProjectNotFoundError(msg)

        field = self._find_field(project.id, status_field)
        if field is None:
            msg = f"Status field not found: {status_field}"
            raise StatusFieldNotFoundError(msg)

        logger.debug(
            "Resolved project '%s' (%s), status field %s with %d options",
            project.title,
            project.id,
            field.id,
            len(field.options),
        )
        self._cached = ProjectContext(
            project_id=project.id,
            title=project.title,
            status_field_id=field.id,
            status_field_name=field.name,
            status_options=dict(field.options),
        )
        return self._cached

    def _find_by_number(self, owner: str, number: int) -> ProjectRef | None:
        for scope in PROJECT_SCOPES:
            project = self._github.get_project_by_number(owner, scope, number)
            if project is not None:
                return project
        return None

    def _find_by_title(self, owner: str, title: str) -> ProjectRef | None:
        # Search text narrows the listing; only an exact title counts as a match
        for scope in PROJECT_SCOPES:
            projects = iterate_pages(
                lambda cursor, scope=scope: self._github.list_projects(
                    owner, scope, title, cursor
                )
            )
            for project in projects:
                if project.title == title:
                    return project
        return None

    def _find_field(self, project_id: str, field_name: str) -> ProjectField | None:
        found: ProjectField | None = None
        for field in iterate_pages(
            lambda cursor: self._github.list_project_fields(project_id, cursor)
        ):
            if field.name == field_name:
                found = field
        return found
