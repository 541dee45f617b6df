"""
Agregation des donnees Hevy: routines du dossier "Current" et statistiques.

Le filtrage par dossier est fait apres la pagination complete des routines.
"""

from typing import Any, Optional

from loguru import logger

from src.adapters.api.cache import TTLCache
from src.adapters.api.hevy_client import HevyClient
from src.core.errors import ConfigurationError, NotFoundError

CURRENT_FOLDER_TITLE = "current"


class FitnessService:
    """
    Operation d'agregation Hevy, resultat mis en cache par limite.

    Le resultat normalise a la forme:
        {"routines": [...],
         "stats": {"workoutCount": int,
                   "recentWorkouts": [{"title", "startTime", "endTime"}]}}
    """

    DEFAULT_LIMIT = 5

    def __init__(self, client: HevyClient, cache: TTLCache[dict[str, Any]]) -> None:
        self._client = client
        self._cache = cache

    async def get(self, force_refresh: bool = False, limit: Optional[int] = None) -> dict[str, Any]:
        """
        Retourne les donnees fitness, depuis le cache si possible.

        Args:
            force_refresh: Ignore le cache et interroge l'API
            limit: Nombre d'entrainements recents (defaut 5)

        Raises:
            ConfigurationError: Cle API absente
            NotFoundError: Aucun dossier "Current"
            UpstreamError: Statut non-2xx ou echec reseau
        """
        limit = limit or self.DEFAULT_LIMIT
        cache_key = f"hevy:{limit}"

        if not force_refresh:
            cached = self._cache.get(cache_key)
            if cached is not None:
                return cached

        if not self._client.configured:
            raise ConfigurationError("Hevy API key not configured")

        folders = await self._client.get_routine_folders()
        current_folder = next(
            (f for f in folders if str(f.get("title", "")).lower() == CURRENT_FOLDER_TITLE),
            None,
        )
        if current_folder is None:
            raise NotFoundError('No "Current" folder found in Hevy')

        routines = await self._client.get_routines()
        current_routines = [r for r in routines if r.get("folder_id") == current_folder["id"]]

        workout_count = await self._client.get_workout_count()
        workouts = await self._client.get_recent_workouts(limit)

        result = {
            "routines": current_routines,
            "stats": {
                "workoutCount": workout_count,
                "recentWorkouts": [
                    {
                        "title": w.get("title"),
                        "startTime": w.get("start_time"),
                        "endTime": w.get("end_time"),
                    }
                    for w in workouts
                ],
            },
        }

        logger.info(
            f"Hevy: {len(current_routines)}/{len(routines)} routines in Current, "
            f"{workout_count} workouts"
        )
        self._cache.set(cache_key, result)
        return result
