"""
CLI commands for the database.
"""

import asyncio

import click
from rich.console import Console

from corphub.database.session import dispose_engine, init_db

console = Console()


@click.group(name="db")
def db_group():
    """Commands for managing the database."""
    pass


@db_group.command(name="init")
def init_database():
    """
    Create all tables from the models.

    Meant for local development; use alembic migrations elsewhere.
    """
    asyncio.run(_init_database())


async def _init_database():
    try:
        await init_db()
    finally:
        await dispose_engine()
    console.print("[green]✓[/green] Database tables created")
