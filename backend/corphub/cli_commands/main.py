#!/usr/bin/env python3
"""
Main CLI entry point for CorpHub commands.
"""

import click

from corphub.utils.logging import setup_logging
from corphub.cli_commands.company_commands import company_group
from corphub.cli_commands.db_commands import db_group


@click.group()
@click.option("--log-level", default="WARNING", show_default=True, help="Logging level")
def cli(log_level: str):
    """CorpHub CLI - Manage your application from the command line."""
    setup_logging(log_level)


# Register command groups
cli.add_command(company_group)
cli.add_command(db_group)


if __name__ == "__main__":
    cli()
