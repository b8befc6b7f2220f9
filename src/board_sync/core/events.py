"""GitHub Actions event payload parsing."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from board_sync.core.errors import EventPayloadError

PULL_REQUEST_EVENTS = frozenset({"pull_request", "pull_request_target"})


@dataclass(frozen=True)
class PullRequestEvent:
    """The parts of a pull_request event the sync pipeline needs."""

    event_name: str
    action: str
    repo_owner: str
    repo_name: str
    number: int
    url: str
    body: str | None
    labels: list[str]
    author_login: str | None

    @property
    def trigger(self) -> str:
        return f"{self.event_name}/{self.action}"

    @property
    def repo_ref(self) -> str:
        return f"{self.repo_owner}/{self.repo_name}"


def parse_pull_request_event(event_name: str, payload: dict[str, Any]) -> PullRequestEvent:
    """Build a PullRequestEvent from a decoded event payload.

    Raises:
        EventPayloadError: If the payload has no pull_request or repository
    """
    pr = payload.get("pull_request")
    if not pr or "number" not in pr:
        msg = "Missing pull_request in event payload"
        raise EventPayloadError(msg)

    repository = payload.get("repository") or {}
    owner = (repository.get("owner") or {}).get("login")
    name = repository.get("name")
    if not owner or not name:
        msg = "Missing repository owner/name in event payload"
        raise EventPayloadError(msg)

    return PullRequestEvent(
        event_name=event_name,
        action=str(payload.get("action", "")),
        repo_owner=owner,
        repo_name=name,
        number=int(pr["number"]),
        url=pr.get("html_url", ""),
        body=pr.get("body"),
        labels=[label["name"] for label in pr.get("labels") or [] if label.get("name")],
        author_login=(pr.get("user") or {}).get("login"),
    )


def load_event_payload(event_path: Path) -> dict[str, Any]:
    """Read the JSON payload GitHub Actions writes to GITHUB_EVENT_PATH."""
    if not event_path.exists():
        msg = f"Event payload not found at {event_path}"
        raise EventPayloadError(msg)
    with open(event_path, encoding="utf-8") as f:
        return json.load(f)
