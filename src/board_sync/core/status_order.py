"""Total order over project status names.

Every "did we advance or regress" decision goes through StatusOrder. Status
names are compared by their index in the configured sequence, never by string
equality or the order in which they were seen.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from board_sync.core.errors import UnknownStatusError


@dataclass(frozen=True)
class StatusOrder:
    """Ordered, duplicate-free sequence of status names.

    Example:
        >>> order = StatusOrder.of(["Backlog", "Ready", "In Progress"])
        >>> order.compare("Ready", "Backlog")
        1
        >>> order.max("Ready", "In Progress")
        'In Progress'
    """

    names: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.names:
            msg = "status order must contain at least one status"
            raise ValueError(msg)
        seen: set[str] = set()
        for name in self.names:
            if name in seen:
                msg = f"status order lists '{name}' more than once"
                raise ValueError(msg)
            seen.add(name)

    @staticmethod
    def of(names: Iterable[str]) -> "StatusOrder":
        return StatusOrder(names=tuple(names))

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def index(self, name: str) -> int:
        """Return the rank of a status.

        Raises:
            UnknownStatusError: If the name is not in the order
        """
        if name not in self.names:
            raise UnknownStatusError(name)
        return self.names.index(name)

    def require(self, name: str) -> str:
        """Validate that a status is known and return it unchanged."""
        self.index(name)
        return name

    def compare(self, a: str, b: str) -> int:
        """Compare two statuses: -1 if a is earlier, 0 if equal, 1 if later."""
        index_a = self.index(a)
        index_b = self.index(b)
        if index_a == index_b:
            return 0
        return -1 if index_a < index_b else 1

    def is_at_or_after(self, current: str, target: str) -> bool:
        return self.compare(current, target) >= 0

    def max(self, a: str, b: str) -> str:
        """Return whichever status is not earlier; a wins a tie."""
        return a if self.compare(a, b) >= 0 else b
