"""
CLI commands for inspecting company profiles.
"""

import asyncio
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from corphub.database.session import dispose_engine
from corphub.database.search import SORTABLE_COLUMNS
from corphub.exceptions import CorpHubError
from corphub.services.company_profile_service import CompanyProfileService
from corphub.utils.logging import get_logger

console = Console()
logger = get_logger("company_cli")


def _run(coro):
    """Run a coroutine and release the pool afterwards."""
    async def runner():
        try:
            return await coro
        finally:
            await dispose_engine()

    try:
        return asyncio.run(runner())
    except CorpHubError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise SystemExit(1)


@click.group(name="companies")
def company_group():
    """Commands for company profiles."""
    pass


@company_group.command(name="stats")
def show_stats():
    """Show aggregate company statistics."""
    stats = _run(CompanyProfileService().get_company_stats())

    table = Table(title="Company statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")
    for key, value in stats.items():
        table.add_row(key.replace("_", " ").capitalize(), str(value))
    console.print(table)


@company_group.command(name="search")
@click.option("--search", "-s", help="Match against name or description")
@click.option("--industry", help="Industry substring")
@click.option("--city", help="City substring")
@click.option("--state", help="State substring")
@click.option("--country", help="Country substring")
@click.option("--page", "-p", type=int, default=1, show_default=True)
@click.option("--limit", "-l", type=int, default=10, show_default=True)
@click.option(
    "--sort-by",
    type=click.Choice(sorted(SORTABLE_COLUMNS)),
    default="created_at",
    show_default=True,
)
@click.option(
    "--sort-order",
    type=click.Choice(["ASC", "DESC"], case_sensitive=False),
    default="DESC",
    show_default=True,
)
def search_companies(
    search: Optional[str],
    industry: Optional[str],
    city: Optional[str],
    state: Optional[str],
    country: Optional[str],
    page: int,
    limit: int,
    sort_by: str,
    sort_order: str,
):
    """Search company profiles."""
    filters = {
        "search": search,
        "industry": industry,
        "city": city,
        "state": state,
        "country": country,
    }
    pagination = {"page": page, "limit": limit, "sort_by": sort_by, "sort_order": sort_order}
    result = _run(CompanyProfileService().search_companies(filters, pagination))

    meta = result["pagination"]
    table = Table(
        title=f"Companies (page {meta['current_page']}/{meta['total_pages']}, "
        f"{meta['total_records']} total)"
    )
    table.add_column("Name", style="cyan")
    table.add_column("Industry")
    table.add_column("City")
    table.add_column("Country")
    table.add_column("Created", style="dim")
    for company in result["companies"]:
        table.add_row(
            company.company_name,
            company.industry or "",
            company.city or "",
            company.country or "",
            company.created_at.strftime("%Y-%m-%d"),
        )
    console.print(table)


@company_group.command(name="check-name")
@click.argument("name")
def check_name(name: str):
    """Check whether a company name is still free."""
    available = _run(CompanyProfileService().is_company_name_available(name))
    if available:
        console.print(f"[green]✓[/green] '{name}' is available")
    else:
        console.print(f"[yellow]'{name}' is already taken[/yellow]")
