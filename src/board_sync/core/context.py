"""Per-invocation context with dependency injection."""

from dataclasses import dataclass

from board_sync.core.github.abc import GitHub
from board_sync.core.github.real import RealGitHub
from board_sync.core.github.retrying import RetryingGitHub
from board_sync.core.projects import ProjectDirectory
from board_sync.core.time.abc import Time
from board_sync.core.time.real import RealTime


@dataclass(frozen=True)
class SyncContext:
    """Immutable context holding all dependencies for one sync run.

    Created at the CLI entry point and threaded through every call. The
    project directory is the only mutable piece: it memoizes the project
    lookup for the lifetime of this context.
    """

    github: GitHub
    time: Time
    projects: ProjectDirectory
    dry_run: bool

    @staticmethod
    def for_test(
        github: GitHub | None = None,
        time: Time | None = None,
        dry_run: bool = False,
    ) -> "SyncContext":
        """Create test context backed by fakes.

        Args:
            github: Optional GitHub implementation. If None, creates empty FakeGitHub.
            time: Optional Time implementation. If None, creates FakeTime.
            dry_run: Whether to enable dry-run mode (default False).

        Example:
            >>> github = FakeGitHub(issues={("acme", "tracker", 7): issue})
            >>> ctx = SyncContext.for_test(github=github)
        """
        from board_sync.core.github.fake import FakeGitHub
        from board_sync.core.time.fake import FakeTime

        if github is None:
            github = FakeGitHub()

        if time is None:
            time = FakeTime()

        return SyncContext(
            github=github,
            time=time,
            projects=ProjectDirectory(github),
            dry_run=dry_run,
        )


def create_context(*, dry_run: bool) -> SyncContext:
    """Create production context with real implementations.

    Every GitHub call goes through RetryingGitHub.
    """
    time = RealTime()
    github: GitHub = RetryingGitHub(RealGitHub(), time)
    return SyncContext(
        github=github,
        time=time,
        projects=ProjectDirectory(github),
        dry_run=dry_run,
    )
