"""Output utilities for CLI commands with clear intent.

user_output: human-readable messages, written to stderr.
machine_output: structured results (JSON), written to stdout.
"""

import os
from pathlib import Path
from typing import NoReturn

import click


def user_output(message: str) -> None:
    click.echo(message, err=True)


def machine_output(message: str) -> None:
    click.echo(message)


def fail(message: str) -> NoReturn:
    """Report a fatal error and exit with status 1.

    Inside GitHub Actions an ::error:: workflow command is emitted as well, so
    the message shows up as an annotation on the run.
    """
    if os.environ.get("GITHUB_ACTIONS") == "true":
        click.echo(f"::error::{message}")
    user_output(click.style("Error: ", fg="red") + message)
    raise SystemExit(1)


def write_step_outputs(outputs: dict[str, str], output_file: Path) -> None:
    """Append name=value lines to the file named by GITHUB_OUTPUT."""
    with open(output_file, "a", encoding="utf-8") as f:
        for name, value in outputs.items():
            f.write(f"{name}={value}\n")
