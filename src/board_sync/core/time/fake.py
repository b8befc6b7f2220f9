"""Fake Time implementation for testing.

FakeTime tracks sleep() calls without actually sleeping and reports a fixed
clock, so backoff schedules and audit timestamps are deterministic.
"""

from datetime import UTC, datetime

from board_sync.core.time.abc import Time

DEFAULT_FAKE_NOW = datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC)


class FakeTime(Time):
    """In-memory fake implementation that tracks calls without sleeping.

    This class has NO public setup methods. All state is provided via constructor
    or captured during execution.
    """

    def __init__(self, *, now: datetime = DEFAULT_FAKE_NOW) -> None:
        """Create FakeTime with empty call tracking.

        Args:
            now: Fixed value returned by now()
        """
        self._now = now
        self._sleep_calls: list[float] = []

    @property
    def sleep_calls(self) -> list[float]:
        """Get the list of sleep() calls that were made.

        This property is for test assertions only.
        """
        return self._sleep_calls

    def sleep(self, seconds: float) -> None:
        self._sleep_calls.append(seconds)

    def now(self) -> datetime:
        return self._now
