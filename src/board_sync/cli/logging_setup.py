"""Logging configuration for the CLI entry point."""

import logging
import os


def debug_enabled() -> bool:
    """True when BOARD_SYNC_DEBUG is set or the Actions runner has debug logging on."""
    return bool(os.environ.get("BOARD_SYNC_DEBUG")) or os.environ.get("RUNNER_DEBUG") == "1"


def configure_logging() -> None:
    level = logging.DEBUG if debug_enabled() else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
