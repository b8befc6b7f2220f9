"""Project item resolution and monotonic status advancement.

An issue is linked to a project board through a project item. ensure_tracked
finds or creates that item; advance_status moves its status forward and never
backward: an item already at or past the requested status is left alone.
"""

import logging
from dataclasses import dataclass

from board_sync.core.context import SyncContext
from board_sync.core.errors import ProjectItemUnresolvedError
from board_sync.core.github.types import IssueInfo
from board_sync.core.projects import ProjectContext, iterate_pages
from board_sync.core.status_order import StatusOrder

logger = logging.getLogger(__name__)

DRY_RUN_ITEM_ID = "dry-run-item"


@dataclass(frozen=True)
class ProjectItemLink:
    """An issue's item on the project board.

    Attributes:
        item_id: Project item id
        current_status: Current status option name, None when unset
        created: True if the item was created (or would be, in dry run) by
            this call
    """

    item_id: str
    current_status: str | None
    created: bool = False


@dataclass(frozen=True)
class StatusTransition:
    changed: bool
    previous_status: str | None
    new_status: str | None


def find_project_item(ctx: SyncContext, project_id: str, issue: IssueInfo) -> str | None:
    """Return the id of the issue's item on the given project, if any."""
    items = iterate_pages(
        lambda cursor: ctx.github.list_issue_project_items(
            issue.owner, issue.repo, issue.number, cursor
        )
    )
    for item in items:
        if item.project_id == project_id:
            return item.item_id
    return None


def read_item_status(ctx: SyncContext, item_id: str, status_field: str) -> str | None:
    """Read the item's current value of the named single-select field."""
    for value in ctx.github.get_item_field_values(item_id):
        if value.field_name == status_field:
            return value.value_name
    return None


def ensure_tracked(
    ctx: SyncContext, project: ProjectContext, issue: IssueInfo
) -> ProjectItemLink:
    """Find the issue's project item, creating it if the issue is not tracked yet.

    Lookups are not cached across calls; calling this twice for the same
    issue repeats the lookup and finds the item created by the first call.

    Args:
        ctx: Sync context
        project: Resolved project
        issue: Issue to track (its node id is used when creating the item)

    Returns:
        The item link. A newly created item reports no status, without a
        remote read.

    Raises:
        ProjectItemUnresolvedError: If the create mutation returned no item id
    """
    item_id = find_project_item(ctx, project.project_id, issue)
    if item_id is not None:
        current = read_item_status(ctx, item_id, project.status_field_name)
        logger.info(
            "Issue %s already in project '%s' (status: %s)", issue.ref, project.title, current
        )
        return ProjectItemLink(item_id=item_id, current_status=current)

    if ctx.dry_run:
        logger.info("[dry-run] Would add issue %s to project '%s'", issue.ref, project.title)
        return ProjectItemLink(item_id=DRY_RUN_ITEM_ID, current_status=None, created=True)

    item_id = ctx.github.add_project_item(project.project_id, issue.node_id)
    if not item_id:
        msg = f"Failed to resolve project item for issue {issue.ref}"
        raise ProjectItemUnresolvedError(msg)

    logger.info("Added issue %s to project '%s'", issue.ref, project.title)
    return ProjectItemLink(item_id=item_id, current_status=None, created=True)


def advance_status(
    ctx: SyncContext,
    project: ProjectContext,
    order: StatusOrder,
    item_id: str,
    current_status: str | None,
    target_status: str,
) -> StatusTransition:
    """Move the item's status to target_status unless it is already at or past it.

    Raises:
        StatusOptionNotFoundError: If the status field has no target option
        UnknownStatusError: If current or target is not in the order
    """
    option_id = project.option_id(target_status)

    if current_status is not None and order.is_at_or_after(current_status, target_status):
        logger.info(
            "Current status '%s' is at/after '%s', skipping update", current_status, target_status
        )
        return StatusTransition(
            changed=False, previous_status=current_status, new_status=current_status
        )

    if ctx.dry_run:
        logger.info("[dry-run] Would update status to '%s'", target_status)
        return StatusTransition(
            changed=False, previous_status=current_status, new_status=target_status
        )

    ctx.github.update_item_status(project.project_id, item_id, project.status_field_id, option_id)
    logger.info("Status updated: %s -> %s", current_status or "(none)", target_status)
    return StatusTransition(changed=True, previous_status=current_status, new_status=target_status)
