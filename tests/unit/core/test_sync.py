"""Tests for the end-to-end sync pipeline against FakeGitHub."""

from dataclasses import replace

import pytest

from board_sync.core.context import SyncContext
from board_sync.core.errors import ProjectNotFoundError, UnknownStatusError
from board_sync.core.rules import EnsureStatusAtLeast, Rule
from board_sync.core.sync import SyncResult, sync_event
from tests.test_utils.builders import (
    PROJECT_ID,
    STATUS_FIELD_ID,
    make_config,
    make_github,
    make_payload,
)


def test_opened_tracks_issue_assigns_author_and_audits() -> None:
    github = make_github()
    ctx = SyncContext.for_test(github=github)

    result = sync_event(ctx, make_config(), "pull_request", make_payload("opened"))

    assert result.issue_number == 7
    assert result.did_status_change
    assert result.did_assignment_change
    assert not result.did_label_change
    assert result.target_status == "In Progress"
    assert github.created_items == [(PROJECT_ID, "I_7")]
    assert github.status_updates == [(PROJECT_ID, "PVTI_1", STATUS_FIELD_ID, "opt_2")]
    assert github.added_assignees == [(("acme", "tracker", 7), ["octocat"])]

    issue_comments = [body for key, body in github.comments if key == ("acme", "tracker", 7)]
    assert len(issue_comments) == 2
    assert issue_comments[0].startswith("🔄 Automation: Issue assignee added: octocat")
    assert "- Details: (none) -> In Progress" in issue_comments[1]
    assert "- Timestamp: 2024-01-15T12:00:00+00:00" in issue_comments[1]


def test_ready_for_review_labels_pr_and_advances_status() -> None:
    github = make_github(current_status="In Progress")
    ctx = SyncContext.for_test(github=github)

    result = sync_event(ctx, make_config(), "pull_request", make_payload("ready_for_review"))

    assert result.did_label_change
    assert result.did_status_change
    assert result.previous_status == "In Progress"
    assert result.new_status == "In review"
    assert github.added_labels == [(("acme", "app", 10), ["Ready For Review"])]
    assert github.created_items == []


def test_completed_item_is_not_moved_back() -> None:
    github = make_github(current_status="Completed")
    ctx = SyncContext.for_test(github=github)

    result = sync_event(
        ctx,
        make_config(),
        "pull_request",
        make_payload("ready_for_review", labels=["Ready For Review"]),
    )

    assert not result.did_status_change
    assert not result.did_label_change
    assert result.target_status == "In review"
    assert github.status_updates == []
    assert github.comments == []


def test_rerun_is_idempotent() -> None:
    github = make_github()
    config = make_config()
    ctx = SyncContext.for_test(github=github)

    sync_event(ctx, config, "pull_request", make_payload("opened"))
    second = sync_event(
        SyncContext.for_test(github=github), config, "pull_request", make_payload("opened")
    )

    assert not second.did_status_change
    assert len(github.created_items) == 1
    assert len(github.status_updates) == 1


def test_converted_to_draft_removes_label_without_touching_project() -> None:
    github = make_github()
    ctx = SyncContext.for_test(github=github)

    result = sync_event(
        ctx,
        make_config(),
        "pull_request",
        make_payload("converted_to_draft", labels=["Ready For Review"]),
    )

    assert result.did_label_removal
    assert result.target_status is None
    assert github.removed_labels == [(("acme", "app", 10), "Ready For Review")]
    assert "list_projects" not in github.call_counts


def test_no_matching_rule_is_skipped() -> None:
    github = make_github()
    ctx = SyncContext.for_test(github=github)

    result = sync_event(ctx, make_config(), "pull_request", make_payload("closed"))

    assert result.skipped_reason == "No matching rules for pull_request/closed"
    assert github.call_counts == {}


def test_unsupported_event_is_skipped() -> None:
    ctx = SyncContext.for_test(github=make_github())

    result = sync_event(ctx, make_config(), "push", {})

    assert result.skipped_reason == "Unsupported event: push"


def test_missing_targets_comments_on_pr() -> None:
    github = make_github()
    ctx = SyncContext.for_test(github=github)

    result = sync_event(
        ctx, make_config(), "pull_request", make_payload("opened", body="No link here")
    )

    assert result.skipped_reason == "Missing Targets line"
    assert result.issue_number is None
    assert len(github.comments) == 1
    key, body = github.comments[0]
    assert key == ("acme", "app", 10)
    assert "Targets: acme/tracker#<issue_id>" in body
    assert "get_issue" not in github.call_counts


def test_foreign_target_is_rejected() -> None:
    github = make_github()
    ctx = SyncContext.for_test(github=github)

    result = sync_event(
        ctx, make_config(), "pull_request", make_payload(body="Targets: owner2/repo2#7")
    )

    assert result.skipped_reason == "Targets line does not match configured issue repo"
    assert github.created_items == []


def test_dry_run_writes_nothing() -> None:
    github = make_github()
    ctx = SyncContext.for_test(github=github, dry_run=True)

    result = sync_event(ctx, make_config(), "pull_request", make_payload("opened"))

    assert not result.did_status_change
    assert result.new_status == "In Progress"
    assert github.created_items == []
    assert github.status_updates == []
    assert github.added_assignees == []
    assert github.comments == []


def test_unknown_project_aborts() -> None:
    config = make_config()
    config = replace(config, project=config.project.model_copy(update={"name": "Missing"}))
    ctx = SyncContext.for_test(github=make_github())

    with pytest.raises(ProjectNotFoundError):
        sync_event(ctx, config, "pull_request", make_payload("opened"))


def test_status_missing_from_order_aborts_before_any_write() -> None:
    config = make_config()
    config = replace(
        config,
        rules=(
            Rule(
                event="pull_request",
                actions=frozenset({"opened"}),
                effects=(EnsureStatusAtLeast("Shipped"),),
            ),
        ),
    )
    github = make_github()
    ctx = SyncContext.for_test(github=github)

    with pytest.raises(UnknownStatusError):
        sync_event(ctx, config, "pull_request", make_payload("opened"))

    assert github.call_counts == {}


def test_sync_result_outputs() -> None:
    result = SyncResult(issue_number=7, did_status_change=True, target_status="In review")

    assert result.to_outputs() == {
        "issue_number": "7",
        "did_label_change": "false",
        "did_label_removal": "false",
        "did_assignment_change": "false",
        "did_status_change": "true",
        "target_status": "In review",
    }
    assert SyncResult(skipped_reason="x").to_outputs()["issue_number"] == ""


def test_removal_audit_names_only_labels_actually_removed() -> None:
    rules = [
        {
            "on": {"event": "pull_request", "actions": ["converted_to_draft"]},
            "do": [
                {"remove_pr_labels_if_present": ["Ready For Review", "needs-qa"]},
                {"audit_on_change": True},
            ],
        }
    ]
    github = make_github()
    ctx = SyncContext.for_test(github=github)

    result = sync_event(
        ctx,
        make_config(rules),
        "pull_request",
        make_payload("converted_to_draft", labels=["ready for review"]),
    )

    assert result.did_label_removal
    assert result.removed_labels == ("ready for review",)
    assert github.removed_labels == [(("acme", "app", 10), "ready for review")]
    assert len(github.comments) == 1
    key, body = github.comments[0]
    assert key == ("acme", "tracker", 7)
    assert body.splitlines()[0] == "🔄 Automation: Labels removed: ready for review"
    assert "needs-qa" not in body
