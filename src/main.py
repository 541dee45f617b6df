"""
Point d'entrée CLI de Vitrine.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from .adapters.cli.commands import fitness, history, market_app, scrobbles
from .config import Settings
from .container import Container
from .logging_config import configure_logging

__version__ = "0.1.0"

app = typer.Typer(
    name="vitrine",
    help="Agrégation des API du site personnel et surveillance du marché CSFloat",
)
container = Container()


# Opérations d'agrégation
app.command()(fitness)
app.command()(scrobbles)
app.command()(history)

# Monter market_app comme sous-commande
app.add_typer(market_app, name="market")


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


def _status(enabled: bool) -> str:
    return "activée" if enabled else "désactivée"


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration Vitrine")
    typer.echo(f"API Hevy : {_status(config.hevy_enabled)}")
    typer.echo(f"API Last.fm : {_status(config.lastfm_enabled)}")
    typer.echo(f"API Trakt : {_status(config.trakt_enabled)}")
    typer.echo(f"API TMDB : {_status(config.tmdb_enabled)}")
    store = "Directus" if config.directus_enabled else str(config.credentials_dir)
    typer.echo(f"Stockage des jetons : {store}")
    typer.echo(f"Proxies marché : {len(config.market_proxies)}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"Vitrine v{__version__}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur web Vitrine."""
    import uvicorn

    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("src.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entrée de l'application."""
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )

    logger.info("Démarrage de Vitrine", version=__version__)

    app()


if __name__ == "__main__":
    main()
