"""Show the action plan the rules produce for an event, without touching GitHub."""

import json
from dataclasses import asdict
from pathlib import Path

import click

from board_sync.cli.commands.options import config_options
from board_sync.cli.output import fail, machine_output
from board_sync.config import load_config, resolve_config_path
from board_sync.core.errors import BoardSyncError
from board_sync.core.rules import build_action_plan, select_rules


@click.command("plan")
@click.argument("event_name")
@click.argument("action")
@config_options
def plan_cmd(event_name: str, action: str, config_path: str, workspace: Path) -> None:
    """Print the merged plan for EVENT_NAME/ACTION as JSON.

    Example:

        board-sync plan pull_request ready_for_review
    """
    try:
        config = load_config(resolve_config_path(config_path, workspace))
        plan = build_action_plan(config.rules, config.status_order, event_name, action)
    except BoardSyncError as e:
        fail(str(e))

    matched = len(select_rules(config.rules, event_name, action))
    machine_output(
        json.dumps(
            {
                "trigger": f"{event_name}/{action}",
                "matched_rules": matched,
                "plan": asdict(plan) if plan is not None else None,
            },
            indent=2,
        )
    )
