"""Sous-package CLI commands - re-exporte les commandes publiques."""

from src.adapters.cli.commands.aggregation_commands import (
    fitness,
    history,
    scrobbles,
)
from src.adapters.cli.commands.market_commands import (
    market_app,
    market_fetch,
    market_threshold,
)

__all__ = [
    # agregation
    "fitness",
    "history",
    "scrobbles",
    # marche
    "market_app",
    "market_fetch",
    "market_threshold",
]
