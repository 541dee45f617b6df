"""
Commandes CLI des operations d'agregation (fitness, scrobbles, historique).
"""

import asyncio
from typing import Annotated, Any, Optional

import typer
from rich.table import Table

from src.adapters.cli.helpers import console, exit_on_error, suppress_loguru, with_container

LimitOption = Annotated[
    Optional[int],
    typer.Option("--limit", "-l", min=1, max=100, help="Nombre d'elements recents"),
]
ForceOption = Annotated[
    bool,
    typer.Option("--force", "-f", help="Ignorer le cache"),
]


def fitness(limit: LimitOption = None, force: ForceOption = False) -> None:
    """Affiche les routines "Current" et les derniers entrainements Hevy."""
    with exit_on_error():
        data = asyncio.run(_fitness_async(limit=limit, force=force))

    console.print(
        f"[bold cyan]Hevy[/bold cyan]: {data['stats']['workoutCount']} entrainements, "
        f"{len(data['routines'])} routine(s) dans Current"
    )
    for routine in data["routines"]:
        console.print(f"  - {routine.get('title')}")

    table = Table(title="Derniers entrainements")
    table.add_column("Titre")
    table.add_column("Debut")
    table.add_column("Fin")
    for workout in data["stats"]["recentWorkouts"]:
        table.add_row(workout["title"] or "", workout["startTime"] or "", workout["endTime"] or "")
    console.print(table)


@with_container()
async def _fitness_async(container, limit: Optional[int], force: bool) -> dict[str, Any]:
    client = container.hevy_client()
    try:
        with suppress_loguru():
            return await container.fitness_service().get(force_refresh=force, limit=limit)
    finally:
        await client.close()


def scrobbles(limit: LimitOption = None, force: ForceOption = False) -> None:
    """Affiche les derniers titres ecoutes sur Last.fm."""
    with exit_on_error():
        data = asyncio.run(_scrobbles_async(limit=limit, force=force))

    stats = data["stats"]
    console.print(
        f"[bold cyan]Last.fm[/bold cyan]: {stats['username']} - {stats['playcount']} scrobbles"
    )
    table = Table()
    table.add_column("")
    table.add_column("Titre")
    table.add_column("Artiste")
    table.add_column("Album")
    for track in data["tracks"]:
        table.add_row(
            "▶" if track["nowPlaying"] else "",
            track["name"] or "",
            track["artist"] or "",
            track["album"] or "",
        )
    console.print(table)


@with_container()
async def _scrobbles_async(container, limit: Optional[int], force: bool) -> dict[str, Any]:
    client = container.lastfm_client()
    try:
        with suppress_loguru():
            return await container.scrobble_service().get(force_refresh=force, limit=limit)
    finally:
        await client.close()


def history(limit: LimitOption = None, force: ForceOption = False) -> None:
    """Affiche l'historique de visionnage Trakt."""
    with exit_on_error():
        data = asyncio.run(_history_async(limit=limit, force=force))

    stats = data["stats"]
    console.print(
        f"[bold cyan]Trakt[/bold cyan]: {stats['movies']['watched']} films, "
        f"{stats['episodes']['watched']} episodes"
    )
    table = Table()
    table.add_column("Vu le")
    table.add_column("Titre")
    table.add_column("Episode")
    table.add_column("Poster", style="dim")
    for item in data["history"]:
        episode = item.get("episode")
        label = (
            f"S{episode['season'] or 0:02d}E{episode['number'] or 0:02d}" if episode else ""
        )
        table.add_row(
            item["watchedAt"] or "",
            f"{item['title']} ({item['year']})",
            label,
            "oui" if item["poster"] else "-",
        )
    console.print(table)


@with_container()
async def _history_async(container, limit: Optional[int], force: bool) -> dict[str, Any]:
    try:
        with suppress_loguru():
            return await container.watch_history_service().get(force_refresh=force, limit=limit)
    finally:
        await container.tmdb_client().close()
        await container.trakt_http().aclose()
        await container.credential_store().close()
