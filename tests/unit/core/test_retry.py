"""Tests for rate-limit retry with backoff."""

import pytest

from board_sync.core.errors import GitHubAPIError
from board_sync.core.retry import is_rate_limit_error, with_retry
from board_sync.core.time.fake import FakeTime


def _rate_limited() -> GitHubAPIError:
    return GitHubAPIError("API rate limit exceeded for installation", status=403)


class _Flaky:
    """Callable that raises the queued errors, then returns value."""

    def __init__(self, errors: list[Exception], value: str = "ok") -> None:
        self._errors = list(errors)
        self._value = value
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        if self._errors:
            raise self._errors.pop(0)
        return self._value


def test_success_on_first_attempt_does_not_sleep() -> None:
    time = FakeTime()
    operation = _Flaky([])

    assert with_retry(operation, "get_issue", time=time) == "ok"
    assert operation.calls == 1
    assert time.sleep_calls == []


def test_rate_limit_then_success() -> None:
    time = FakeTime()
    operation = _Flaky([_rate_limited()])

    assert with_retry(operation, "get_issue", time=time) == "ok"
    assert operation.calls == 2
    assert time.sleep_calls == [1.0]


def test_rate_limit_exhausts_three_attempts() -> None:
    time = FakeTime()
    operation = _Flaky([_rate_limited(), _rate_limited(), _rate_limited()])

    with pytest.raises(GitHubAPIError, match="rate limit"):
        with_retry(operation, "get_issue", time=time)

    assert operation.calls == 3
    assert time.sleep_calls == [1.0, 2.0]


def test_forbidden_without_rate_limit_is_not_retried() -> None:
    time = FakeTime()
    operation = _Flaky([GitHubAPIError("Resource not accessible by integration", status=403)])

    with pytest.raises(GitHubAPIError, match="not accessible"):
        with_retry(operation, "add_labels", time=time)

    assert operation.calls == 1
    assert time.sleep_calls == []


def test_other_errors_are_not_retried() -> None:
    time = FakeTime()
    operation = _Flaky([GitHubAPIError("rate limit mentioned but server error", status=500)])

    with pytest.raises(GitHubAPIError):
        with_retry(operation, "add_labels", time=time)

    assert operation.calls == 1


def test_custom_attempts_and_delay() -> None:
    time = FakeTime()
    operation = _Flaky([_rate_limited()] * 4)

    assert with_retry(operation, "x", time=time, max_attempts=5, base_delay=0.5) == "ok"
    assert time.sleep_calls == [0.5, 1.0, 2.0, 4.0]


def test_is_rate_limit_error() -> None:
    secondary = GitHubAPIError("You have exceeded a secondary Rate Limit", status=403)
    assert is_rate_limit_error(secondary)
    assert not is_rate_limit_error(GitHubAPIError("rate limit", status=None))
    assert not is_rate_limit_error(ValueError("rate limit"))
