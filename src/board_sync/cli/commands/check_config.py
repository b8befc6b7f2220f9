"""Validate the automation config file."""

from pathlib import Path

import click

from board_sync.cli.commands.options import config_options
from board_sync.cli.output import fail, user_output
from board_sync.config import load_config, resolve_config_path
from board_sync.core.errors import ConfigInvalidError


@click.command("check-config")
@config_options
def check_config_cmd(config_path: str, workspace: Path) -> None:
    """Load and validate the config, reporting what it declares."""
    path = resolve_config_path(config_path, workspace)
    try:
        config = load_config(path)
    except ConfigInvalidError as e:
        fail(str(e))

    selector = config.project.name if config.project.name is not None else config.project.number
    user_output(click.style("✓ ", fg="green") + f"Config OK: {path}")
    user_output(f"  Issue repo: {config.issue_owner}/{config.issue_repo}")
    user_output(f"  Project: {config.project.owner} / {selector}")
    user_output(f"  Statuses: {' < '.join(config.status_order.names)}")
    user_output(f"  Rules: {len(config.rules)}")
