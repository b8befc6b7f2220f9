"""Idempotent per-entity operations on pull requests and issues.

Each helper checks current state first and reports what it changed. In
dry-run mode nothing is written and no change is reported.
"""

import logging

from board_sync.core.context import SyncContext
from board_sync.core.errors import GitHubAPIError
from board_sync.core.events import PullRequestEvent
from board_sync.core.github.types import IssueInfo

logger = logging.getLogger(__name__)

UNASSIGNABLE_STATUS = 422
NOT_FOUND_STATUS = 404


def add_label_if_missing(
    ctx: SyncContext, pr: PullRequestEvent, label: str, aliases: tuple[str, ...] = ()
) -> bool:
    """Add label to the PR unless it or any accepted alias is present.

    Label names are compared case-insensitively. When aliases is non-empty it
    replaces the label itself as the set of accepted names.
    """
    acceptable = [name.lower() for name in (aliases or (label,))]
    present = {name.lower() for name in pr.labels}
    if any(name in present for name in acceptable):
        logger.info("Label already present: %s", ", ".join(acceptable))
        return False

    if ctx.dry_run:
        logger.info("[dry-run] Would add label: %s", label)
        return False

    ctx.github.add_labels(pr.repo_owner, pr.repo_name, pr.number, [label])
    logger.info("Added label '%s' to PR #%d", label, pr.number)
    return True


def remove_labels_if_present(
    ctx: SyncContext, pr: PullRequestEvent, labels: tuple[str, ...]
) -> tuple[str, ...]:
    """Remove each listed label that is on the PR.

    Matching is case-insensitive; the PR's own spelling is what gets removed.
    A label that disappeared between the event and the call (404) counts as
    already removed.

    Returns:
        The labels actually removed, spelled as they were on the PR
    """
    wanted = {name.lower() for name in labels}
    present = [name for name in pr.labels if name.lower() in wanted]
    if not present:
        logger.info("No labels to remove: %s", ", ".join(labels))
        return ()

    removed: list[str] = []
    for label in present:
        if ctx.dry_run:
            logger.info("[dry-run] Would remove label: %s", label)
            continue
        try:
            ctx.github.remove_label(pr.repo_owner, pr.repo_name, pr.number, label)
        except GitHubAPIError as e:
            if e.status != NOT_FOUND_STATUS:
                raise
            logger.info("Label '%s' already absent from PR #%d", label, pr.number)
            continue
        logger.info("Removed label '%s' from PR #%d", label, pr.number)
        removed.append(label)
    return tuple(removed)


def assign_issue_if_missing(ctx: SyncContext, issue: IssueInfo, login: str | None) -> bool:
    """Assign login to the issue unless already assigned.

    A login GitHub refuses to assign (422, e.g. no repository access) is
    logged and reported as no change.
    """
    assignee = (login or "").strip()
    if not assignee:
        logger.warning("Skipping issue self-assignment: missing PR author login")
        return False

    if assignee.lower() in {existing.lower() for existing in issue.assignees}:
        logger.info("Issue already assigned to %s", assignee)
        return False

    if ctx.dry_run:
        logger.info("[dry-run] Would assign issue to %s", assignee)
        return False

    try:
        ctx.github.add_assignees(issue.owner, issue.repo, issue.number, [assignee])
    except GitHubAPIError as e:
        if e.status != UNASSIGNABLE_STATUS:
            raise
        logger.warning("Could not assign %s to %s", assignee, issue.ref)
        return False
    logger.info("Assigned %s to %s", assignee, issue.ref)
    return True


def comment_on_pr(ctx: SyncContext, pr: PullRequestEvent, body: str) -> None:
    if ctx.dry_run:
        logger.info("[dry-run] Would comment on PR: %s", body)
        return
    ctx.github.create_comment(pr.repo_owner, pr.repo_name, pr.number, body)


def comment_on_issue(ctx: SyncContext, issue: IssueInfo, body: str) -> None:
    if ctx.dry_run:
        logger.info("[dry-run] Would comment on issue: %s", body)
        return
    ctx.github.create_comment(issue.owner, issue.repo, issue.number, body)
