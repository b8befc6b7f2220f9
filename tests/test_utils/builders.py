"""Builders for board-sync test state.

The default world: issue acme/tracker#7 (node I_7) and project "Roadmap"
(PVT_1, org-owned by acme) whose Status field has one option per status in
STATUSES.
"""

from typing import Any

from board_sync.config import LoadedConfig, compile_config
from board_sync.config_schema import AutomationConfig
from board_sync.core.github.fake import FakeGitHub
from board_sync.core.github.types import (
    FieldValue,
    IssueInfo,
    ProjectField,
    ProjectItemRef,
    ProjectRef,
)
from board_sync.core.projects import ProjectContext

STATUSES = ["Backlog", "Ready", "In Progress", "In review", "Completed"]
PROJECT_ID = "PVT_1"
STATUS_FIELD_ID = "PVTSSF_status"


def status_options() -> dict[str, str]:
    return {name: f"opt_{index}" for index, name in enumerate(STATUSES)}


def make_issue(number: int = 7, assignees: list[str] | None = None) -> IssueInfo:
    return IssueInfo(
        owner="acme",
        repo="tracker",
        number=number,
        node_id=f"I_{number}",
        url=f"https://github.com/acme/tracker/issues/{number}",
        assignees=assignees or [],
    )


def make_status_field() -> ProjectField:
    return ProjectField(id=STATUS_FIELD_ID, name="Status", options=status_options())


def make_project_context() -> ProjectContext:
    return ProjectContext(
        project_id=PROJECT_ID,
        title="Roadmap",
        status_field_id=STATUS_FIELD_ID,
        status_field_name="Status",
        status_options=status_options(),
    )


def make_github(
    *,
    issue: IssueInfo | None = None,
    current_status: str | None = None,
    tracked: bool = False,
    errors: dict[str, list[Exception]] | None = None,
) -> FakeGitHub:
    """FakeGitHub holding the default issue and project.

    Args:
        issue: Issue to serve (defaults to make_issue())
        current_status: Status of the existing item (implies tracked)
        tracked: Whether the issue already has an item on the project
        errors: Per-method exceptions, forwarded to FakeGitHub
    """
    if issue is None:
        issue = make_issue()
    key = (issue.owner, issue.repo, issue.number)
    issue_items: dict[tuple[str, str, int], list[ProjectItemRef]] = {}
    item_values: dict[str, list[FieldValue]] = {}
    if tracked or current_status is not None:
        issue_items[key] = [ProjectItemRef(item_id="PVTI_existing", project_id=PROJECT_ID)]
        if current_status is not None:
            item_values["PVTI_existing"] = [
                FieldValue(field_name="Status", value_name=current_status)
            ]
    return FakeGitHub(
        projects={("organization", "acme"): [ProjectRef(id=PROJECT_ID, title="Roadmap", number=3)]},
        project_fields={
            PROJECT_ID: [ProjectField(id="PVTF_title", name="Title"), make_status_field()]
        },
        issues={key: issue},
        issue_items=issue_items,
        item_values=item_values,
        errors=errors,
    )


def config_data(rules: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    """Raw config mapping, as yaml.safe_load would return it."""
    if rules is None:
        rules = [
            {
                "on": {"event": "pull_request", "actions": ["opened", "reopened"]},
                "do": [
                    {"ensure_issue_in_project": True},
                    {"ensure_status_at_least": "In Progress"},
                    {"assign_issue_to_pr_author": True},
                    {"audit_on_change": True},
                ],
            },
            {
                "on": {"event": "pull_request", "actions": ["ready_for_review"]},
                "do": [
                    {"add_pr_label_if_missing": "Ready For Review"},
                    {"ensure_status_at_least": "In review"},
                    {"audit_on_change": True},
                ],
            },
            {
                "on": {"event": "pull_request", "actions": ["converted_to_draft"]},
                "do": [{"remove_pr_labels_if_present": ["Ready For Review"]}],
            },
        ]
    return {
        "issue_repo": {"owner": "acme", "name": "tracker"},
        "project": {
            "owner": "acme",
            "name": "Roadmap",
            "status_field": "Status",
            "status_order": list(STATUSES),
        },
        "labels": {"ready_for_review": "Ready For Review"},
        "rules": rules,
    }


def make_config(rules: list[dict[str, Any]] | None = None) -> LoadedConfig:
    return compile_config(AutomationConfig.model_validate(config_data(rules)))


def make_payload(
    action: str = "opened",
    *,
    body: str | None = "Fixes things.\n\nTargets: acme/tracker#7",
    labels: list[str] | None = None,
    author: str | None = "octocat",
) -> dict[str, Any]:
    """A pull_request event payload for PR acme/app#10."""
    return {
        "action": action,
        "pull_request": {
            "number": 10,
            "html_url": "https://github.com/acme/app/pull/10",
            "body": body,
            "labels": [{"name": name} for name in labels or []],
            "user": {"login": author} if author is not None else None,
        },
        "repository": {"name": "app", "owner": {"login": "acme"}},
    }
