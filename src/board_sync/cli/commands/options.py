"""Options shared by commands that read the automation config."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from board_sync.config import DEFAULT_CONFIG_PATH


def config_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add --config-path and --workspace, with Actions environment fallbacks."""
    func = click.option(
        "--workspace",
        envvar="GITHUB_WORKSPACE",
        type=click.Path(file_okay=False, path_type=Path),
        default=Path("."),
        help="Directory relative config paths resolve against.",
    )(func)
    func = click.option(
        "--config-path",
        envvar="BOARD_SYNC_CONFIG",
        default=DEFAULT_CONFIG_PATH,
        show_default=True,
        help="Path to the automation YAML file.",
    )(func)
    return func
