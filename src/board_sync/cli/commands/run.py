"""Run the sync pipeline for the current GitHub Actions event."""

import json
import logging
import os
from pathlib import Path

import click

from board_sync.cli.commands.options import config_options
from board_sync.cli.output import fail, machine_output, user_output, write_step_outputs
from board_sync.config import load_config, resolve_config_path
from board_sync.core.context import SyncContext, create_context
from board_sync.core.errors import BoardSyncError
from board_sync.core.events import load_event_payload
from board_sync.core.sync import sync_event

logger = logging.getLogger(__name__)


@click.command("run")
@config_options
@click.option(
    "--event-name",
    envvar="GITHUB_EVENT_NAME",
    required=True,
    help="Event that triggered the workflow (e.g. pull_request).",
)
@click.option(
    "--event-path",
    envvar="GITHUB_EVENT_PATH",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="JSON file holding the event payload.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    envvar="BOARD_SYNC_DRY_RUN",
    help="Log intended changes without writing anything to GitHub.",
)
@click.pass_obj
def run_cmd(
    obj: SyncContext | None,
    config_path: str,
    workspace: Path,
    event_name: str,
    event_path: Path,
    dry_run: bool,
) -> None:
    """Apply the rules matching this pull request event.

    Outputs (issue_number, did_label_change, did_label_removal,
    did_assignment_change, did_status_change, target_status) are printed as
    JSON and appended to $GITHUB_OUTPUT when it is set.
    """
    sync_ctx = obj if obj is not None else create_context(dry_run=dry_run)
    if sync_ctx.dry_run:
        user_output(click.style("Dry run: no changes will be written", fg="yellow"))

    try:
        config = load_config(resolve_config_path(config_path, workspace))
        payload = load_event_payload(event_path)
        result = sync_event(sync_ctx, config, event_name, payload)
    except BoardSyncError as e:
        logger.debug("Sync failed", exc_info=True)
        fail(str(e))

    if result.skipped_reason is not None:
        user_output(f"Skipped: {result.skipped_reason}")

    outputs = result.to_outputs()
    output_file = os.environ.get("GITHUB_OUTPUT")
    if output_file:
        write_step_outputs(outputs, Path(output_file))
    machine_output(json.dumps(outputs))
