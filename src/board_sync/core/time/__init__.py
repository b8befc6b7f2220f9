from board_sync.core.time.abc import Time
from board_sync.core.time.fake import FakeTime
from board_sync.core.time.real import RealTime

__all__ = [
    "FakeTime",
    "RealTime",
    "Time",
]
