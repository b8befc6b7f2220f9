from datetime import UTC, datetime

from board_sync.core.audit import format_audit_comment, format_missing_target_comment


def test_format_audit_comment_with_details() -> None:
    comment = format_audit_comment(
        change="Status updated: In review",
        trigger="pull_request/ready_for_review",
        pr_url="https://github.com/acme/app/pull/10",
        repo="acme/app",
        timestamp=datetime(2024, 1, 15, 12, 0, tzinfo=UTC),
        details="In Progress -> In review",
    )

    assert comment.splitlines() == [
        "🔄 Automation: Status updated: In review",
        "- Trigger: pull_request/ready_for_review",
        "- PR: https://github.com/acme/app/pull/10",
        "- Repo: acme/app",
        "- Details: In Progress -> In review",
        "- Timestamp: 2024-01-15T12:00:00+00:00",
    ]


def test_format_audit_comment_without_details() -> None:
    comment = format_audit_comment(
        change="Label added: Ready For Review",
        trigger="pull_request/ready_for_review",
        pr_url="https://github.com/acme/app/pull/10",
        repo="acme/app",
        timestamp=datetime(2024, 1, 15, 12, 0, tzinfo=UTC),
    )

    assert "- Details:" not in comment


def test_missing_target_comment_names_issue_repo() -> None:
    comment = format_missing_target_comment("acme", "tracker")

    assert "Missing Targets line" in comment
    assert "- Targets: acme/tracker#<issue_id>" in comment
