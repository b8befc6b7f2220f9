"""Exception hierarchy for board-sync.

Pure-logic errors (unknown statuses, invalid config) always abort the run.
Remote errors surface as GitHubAPIError; only a few call sites recover from
specific status codes.
"""


class BoardSyncError(Exception):
    """Base class for all board-sync failures."""


class ConfigInvalidError(BoardSyncError):
    """Configuration file is missing, malformed, or inconsistent."""


class UnknownStatusError(BoardSyncError):
    """A status name is not part of the configured status order."""

    def __init__(self, status: str) -> None:
        super().__init__(f"Unknown status in order list: {status}")
        self.status = status


class ProjectNotFoundError(BoardSyncError):
    """No project matched the configured name or number."""


class StatusFieldNotFoundError(BoardSyncError):
    """The resolved project has no field with the configured status field name."""


class StatusOptionNotFoundError(BoardSyncError):
    """The status field has no option with the requested name."""


class ProjectItemUnresolvedError(BoardSyncError):
    """Adding an issue to a project did not yield an item id."""


class EventPayloadError(BoardSyncError):
    """The GitHub event payload is missing required data."""


class GitHubAPIError(BoardSyncError):
    """A GitHub API call failed.

    Attributes:
        status: HTTP status code when known (None for GraphQL-level errors
            and transport failures)
        message: Error text reported by the API or the gh CLI
    """

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.message = message
