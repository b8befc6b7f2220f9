"""Run one pull-request event through the rule table and apply the plan."""

import logging
from dataclasses import dataclass
from typing import Any

from board_sync.config import LoadedConfig
from board_sync.core.audit import format_audit_comment, format_missing_target_comment
from board_sync.core.context import SyncContext
from board_sync.core.entities import (
    add_label_if_missing,
    assign_issue_if_missing,
    comment_on_issue,
    comment_on_pr,
    remove_labels_if_present,
)
from board_sync.core.events import (
    PULL_REQUEST_EVENTS,
    PullRequestEvent,
    parse_pull_request_event,
)
from board_sync.core.github.types import IssueInfo
from board_sync.core.items import (
    ProjectItemLink,
    StatusTransition,
    advance_status,
    ensure_tracked,
)
from board_sync.core.projects import ProjectContext
from board_sync.core.rules import ActionPlan, build_action_plan
from board_sync.core.targets import parse_target_reference

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncResult:
    """What one run changed, reported as step outputs."""

    issue_number: int | None = None
    did_label_change: bool = False
    did_label_removal: bool = False
    removed_labels: tuple[str, ...] = ()
    did_assignment_change: bool = False
    did_status_change: bool = False
    target_status: str | None = None
    previous_status: str | None = None
    new_status: str | None = None
    skipped_reason: str | None = None

    def to_outputs(self) -> dict[str, str]:
        return {
            "issue_number": str(self.issue_number) if self.issue_number is not None else "",
            "did_label_change": str(self.did_label_change).lower(),
            "did_label_removal": str(self.did_label_removal).lower(),
            "did_assignment_change": str(self.did_assignment_change).lower(),
            "did_status_change": str(self.did_status_change).lower(),
            "target_status": self.target_status or "",
        }


def ensure_tracked_and_status(
    ctx: SyncContext, config: LoadedConfig, issue: IssueInfo
) -> tuple[ProjectContext, ProjectItemLink]:
    """Resolve the configured project and make sure the issue is on it."""
    project = ctx.projects.resolve(
        config.project.owner,
        name=config.project.name,
        number=config.project.number,
        status_field=config.project.status_field,
    )
    return project, ensure_tracked(ctx, project, issue)


def _post_audit_comments(
    ctx: SyncContext,
    event: PullRequestEvent,
    issue: IssueInfo,
    plan: ActionPlan,
    result: SyncResult,
) -> None:
    changes: list[tuple[str, str | None]] = []
    if result.did_label_change:
        changes.append((f"Label added: {plan.label_to_add}", None))
    if result.removed_labels:
        changes.append((f"Labels removed: {', '.join(result.removed_labels)}", None))
    if result.did_assignment_change:
        changes.append((f"Issue assignee added: {event.author_login}", None))
    if result.did_status_change:
        changes.append(
            (
                f"Status updated: {result.new_status}",
                f"{result.previous_status or '(none)'} -> {result.new_status}",
            )
        )

    for change, details in changes:
        comment = format_audit_comment(
            change=change,
            trigger=event.trigger,
            pr_url=event.url,
            repo=event.repo_ref,
            timestamp=ctx.time.now(),
            details=details,
        )
        comment_on_issue(ctx, issue, comment)


def run_sync(ctx: SyncContext, config: LoadedConfig, event: PullRequestEvent) -> SyncResult:
    """Apply every rule matching the event to the PR and its linked issue.

    Returns:
        SyncResult; skipped_reason is set when nothing was attempted (no
        matching rule, or no usable Targets line)

    Raises:
        BoardSyncError: Any unrecovered failure (project lookup, unknown
            status, GitHub API errors)
    """
    plan = build_action_plan(config.rules, config.status_order, event.event_name, event.action)
    if plan is None:
        logger.info("No matching rules for %s", event.trigger)
        return SyncResult(skipped_reason=f"No matching rules for {event.trigger}")

    targets = parse_target_reference(event.body, config.issue_owner, config.issue_repo)
    if targets.target is None:
        notice = format_missing_target_comment(config.issue_owner, config.issue_repo)
        comment_on_pr(ctx, event, notice)
        logger.warning("Targets parsing failed: %s", targets.error)
        return SyncResult(skipped_reason=targets.error)

    target = targets.target
    issue = ctx.github.get_issue(target.owner, target.repo, target.number)

    did_label_change = False
    if plan.label_to_add is not None:
        did_label_change = add_label_if_missing(ctx, event, plan.label_to_add, plan.label_aliases)

    removed_labels: tuple[str, ...] = ()
    if plan.labels_to_remove:
        removed_labels = remove_labels_if_present(ctx, event, plan.labels_to_remove)

    did_assignment_change = False
    if plan.assign_issue_to_author:
        did_assignment_change = assign_issue_if_missing(ctx, issue, event.author_login)

    transition: StatusTransition | None = None
    if plan.touches_project:
        project, link = ensure_tracked_and_status(ctx, config, issue)
        if plan.target_status is not None:
            transition = advance_status(
                ctx,
                project,
                config.status_order,
                link.item_id,
                link.current_status,
                plan.target_status,
            )

    result = SyncResult(
        issue_number=issue.number,
        did_label_change=did_label_change,
        did_label_removal=bool(removed_labels),
        removed_labels=removed_labels,
        did_assignment_change=did_assignment_change,
        did_status_change=transition.changed if transition is not None else False,
        target_status=plan.target_status,
        previous_status=transition.previous_status if transition is not None else None,
        new_status=transition.new_status if transition is not None else None,
    )

    if plan.audit_on_change:
        _post_audit_comments(ctx, event, issue, plan, result)

    return result


def sync_event(
    ctx: SyncContext, config: LoadedConfig, event_name: str, payload: dict[str, Any]
) -> SyncResult:
    """Entry point for a raw Actions event: filter by event type, parse, run."""
    if event_name not in PULL_REQUEST_EVENTS:
        logger.info("Unsupported event: %s", event_name)
        return SyncResult(skipped_reason=f"Unsupported event: {event_name}")

    event = parse_pull_request_event(event_name, payload)
    return run_sync(ctx, config, event)
