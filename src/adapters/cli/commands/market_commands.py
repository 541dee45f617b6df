"""
Commandes CLI de l'outil marche CSFloat.

- market fetch : un fetch des listings via les proxies configures, avec
  detection des bonnes affaires
- market threshold : remise exigee pour un prix de reference
"""

import asyncio
from typing import Annotated, Optional

import typer
from rich.table import Table

from src.adapters.cli.helpers import console, suppress_loguru, with_container
from src.adapters.market.proxy_fetcher import fetch_listings
from src.adapters.market.query import build_listing_url
from src.core.entities.market import FetchResult, MonitorFilters
from src.services.discount import calculate_dynamic_required_percent, find_deals

market_app = typer.Typer(help="Surveillance des listings CSFloat")


@market_app.command("fetch")
def market_fetch(
    min_price: Annotated[
        int, typer.Option("--min-price", help="Prix minimum en centimes")
    ] = 500,
    max_price: Annotated[
        int, typer.Option("--max-price", help="Prix maximum en centimes")
    ] = 100000,
    limit: Annotated[int, typer.Option("--limit", "-l", min=1, max=50)] = 30,
    market_hash_name: Annotated[
        Optional[str], typer.Option("--name", help="Nom exact de l'objet")
    ] = None,
) -> None:
    """Recupere les listings recents et signale les bonnes affaires."""
    filters = MonitorFilters(
        limit=limit,
        min_price=min_price,
        max_price=max_price,
        market_hash_name=market_hash_name,
    )
    asyncio.run(_market_fetch_async(filters=filters))


@with_container()
async def _market_fetch_async(container, filters: MonitorFilters) -> None:
    settings = container.config()
    async with container.market_http() as client:
        with suppress_loguru():
            result: FetchResult = await fetch_listings(
                client,
                build_listing_url(filters),
                api_key=settings.csfloat_api_key,
                proxies=settings.market_proxies,
            )

    if result.rate_limited:
        console.print(
            f"[yellow]Rate limit atteint via {result.proxy_used}, "
            f"reinitialisation dans {result.reset_time}s[/yellow]"
        )
        raise typer.Exit(code=2)
    if not result.ok:
        console.print(f"[bold red]Echec[/bold red] {result.error}")
        raise typer.Exit(code=1)

    deals = find_deals(
        result.listings, settings.discount_constants, settings.min_discount_abs
    )
    console.print(
        f"{len(result.listings)} listing(s) via {result.proxy_used}, "
        f"[green]{len(deals)} bonne(s) affaire(s)[/green]"
    )

    table = Table()
    table.add_column("Objet")
    table.add_column("Prix", justify="right")
    table.add_column("Reference", justify="right")
    table.add_column("Remise", justify="right")
    table.add_column("Exigee", justify="right")
    for deal in deals:
        table.add_row(
            deal.listing.market_hash_name,
            f"${deal.price_usd:,.2f}",
            f"${deal.reference_usd:,.2f}",
            f"{deal.discount_pct:.1%}",
            f"{deal.required_pct:.1%}",
        )
    if deals:
        console.print(table)


@market_app.command("threshold")
def market_threshold(
    price: Annotated[float, typer.Argument(help="Prix de reference en dollars")],
) -> None:
    """Affiche la remise exigee pour un prix de reference."""
    required = asyncio.run(_market_threshold_async(price=price))
    console.print(f"${price:,.2f} -> remise exigee {required:.2%}")


@with_container()
async def _market_threshold_async(container, price: float) -> float:
    settings = container.config()
    return calculate_dynamic_required_percent(price, settings.discount_constants)
