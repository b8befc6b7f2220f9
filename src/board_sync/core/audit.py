"""Audit comment and notification formatting."""

from datetime import datetime


def format_audit_comment(
    *,
    change: str,
    trigger: str,
    pr_url: str,
    repo: str,
    timestamp: datetime,
    details: str | None = None,
) -> str:
    """Render the issue comment recording one automated change.

    Example:
        🔄 Automation: Status updated: In review
        - Trigger: pull_request/ready_for_review
        - PR: https://github.com/acme/app/pull/10
        - Repo: acme/app
        - Details: In Progress -> In review
        - Timestamp: 2024-01-15T12:00:00+00:00
    """
    lines = [
        f"🔄 Automation: {change}",
        f"- Trigger: {trigger}",
        f"- PR: {pr_url}",
        f"- Repo: {repo}",
    ]
    if details:
        lines.append(f"- Details: {details}")
    lines.append(f"- Timestamp: {timestamp.isoformat()}")
    return "\n".join(lines)


def format_missing_target_comment(issue_owner: str, issue_repo: str) -> str:
    """Render the PR comment asking the author to add a Targets line."""
    return (
        "⚠️ Automation: Missing Targets line.\n"
        "Please add one of:\n"
        f"- Targets: {issue_owner}/{issue_repo}#<issue_id>\n"
        "- Targets: #<issue_id> (if issues are in the same repo)"
    )
