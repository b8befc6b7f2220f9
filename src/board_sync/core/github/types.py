"""Type definitions for GitHub operations."""

from dataclasses import dataclass, field
from typing import Generic, Literal, TypeVar

T = TypeVar("T")

ProjectScope = Literal["organization", "user"]

# Project owners are searched as an organization first, then as a user.
PROJECT_SCOPES: tuple[ProjectScope, ...] = ("organization", "user")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a cursor-paginated GraphQL connection."""

    nodes: list[T]
    has_next_page: bool = False
    end_cursor: str | None = None


@dataclass(frozen=True)
class ProjectRef:
    """A GitHub Projects (v2) board."""

    id: str  # GraphQL node id (e.g., "PVT_kwDOABC")
    title: str
    number: int | None = None


@dataclass(frozen=True)
class ProjectField:
    """A project field; options is empty unless it is a single-select field."""

    id: str
    name: str
    options: dict[str, str] = field(default_factory=dict)  # option name -> option id


@dataclass(frozen=True)
class ProjectItemRef:
    """Link between an issue and one project it belongs to."""

    item_id: str
    project_id: str


@dataclass(frozen=True)
class FieldValue:
    """A single-select value currently set on a project item."""

    field_name: str
    value_name: str


@dataclass(frozen=True)
class IssueInfo:
    """Information about a GitHub issue needed for synchronization."""

    owner: str
    repo: str
    number: int
    node_id: str
    url: str
    assignees: list[str]

    @property
    def ref(self) -> str:
        return f"{self.owner}/{self.repo}#{self.number}"
