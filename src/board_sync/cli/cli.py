import click

from board_sync.cli.commands.check_config import check_config_cmd
from board_sync.cli.commands.plan import plan_cmd
from board_sync.cli.commands.run import run_cmd
from board_sync.cli.logging_setup import configure_logging

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="board-sync")
def cli() -> None:
    """Sync issues and project boards from pull request events."""
    configure_logging()


cli.add_command(run_cmd)
cli.add_command(plan_cmd)
cli.add_command(check_config_cmd)


def main() -> None:
    """CLI entry point used by the `board-sync` console script."""
    cli()
