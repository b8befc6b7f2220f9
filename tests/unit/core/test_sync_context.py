"""Tests for SyncContext construction."""

from board_sync.core.context import SyncContext, create_context
from board_sync.core.github.fake import FakeGitHub
from board_sync.core.github.retrying import RetryingGitHub
from board_sync.core.time.fake import FakeTime
from board_sync.core.time.real import RealTime


def test_for_test_defaults_to_fakes() -> None:
    ctx = SyncContext.for_test()

    assert isinstance(ctx.github, FakeGitHub)
    assert isinstance(ctx.time, FakeTime)
    assert ctx.dry_run is False
    assert ctx.projects.cached is None


def test_for_test_uses_given_github() -> None:
    github = FakeGitHub()

    ctx = SyncContext.for_test(github=github, dry_run=True)

    assert ctx.github is github
    assert ctx.dry_run is True


def test_create_context_wraps_github_in_retry() -> None:
    ctx = create_context(dry_run=False)

    assert isinstance(ctx.github, RetryingGitHub)
    assert isinstance(ctx.time, RealTime)
