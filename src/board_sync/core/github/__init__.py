from board_sync.core.github.abc import GitHub
from board_sync.core.github.fake import FakeGitHub
from board_sync.core.github.real import RealGitHub
from board_sync.core.github.retrying import RetryingGitHub
from board_sync.core.github.types import (
    FieldValue,
    IssueInfo,
    Page,
    ProjectField,
    ProjectItemRef,
    ProjectRef,
    ProjectScope,
)

__all__ = [
    "FakeGitHub",
    "FieldValue",
    "GitHub",
    "IssueInfo",
    "Page",
    "ProjectField",
    "ProjectItemRef",
    "ProjectRef",
    "ProjectScope",
    "RealGitHub",
    "RetryingGitHub",
]
