"""
Parcours des collections paginees par numero de page.

L'API doit accepter les parametres page/pageSize et retourner un corps
contenant le tableau d'items ainsi que page et page_count.
"""

from typing import Any, Optional

import httpx
from loguru import logger

from src.core.errors import TransportError, UpstreamError


async def fetch_all_pages(
    client: httpx.AsyncClient,
    path: str,
    items_key: str,
    page_size: int = 10,
    headers: Optional[dict[str, str]] = None,
    service: str = "upstream",
) -> list[Any]:
    """
    Recupere toutes les pages d'une collection et concatene leurs items.

    Les pages sont demandees dans l'ordre (1, 2, 3...) jusqu'a ce que la page
    courante atteigne page_count. Un corps sans page_count est traite comme
    une page unique.

    Args:
        client: Client httpx (base_url du fournisseur)
        path: Chemin de la collection (ex: "/routines")
        items_key: Cle du tableau d'items dans le corps (ex: "routines")
        page_size: Nombre d'items par page
        headers: Headers supplementaires (authentification)
        service: Nom du fournisseur pour les erreurs et logs

    Returns:
        Items de toutes les pages, dans l'ordre des pages

    Raises:
        UpstreamError: Statut non-2xx sur une page (aucune relance)
        TransportError: Echec reseau ou corps illisible
    """
    items: list[Any] = []
    page = 1

    while True:
        try:
            response = await client.get(
                path,
                params={"page": page, "pageSize": page_size},
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise TransportError(service, str(e)) from e

        if not response.is_success:
            raise UpstreamError(service, response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(service, f"invalid JSON on {path} page {page}") from e

        items.extend(data.get(items_key) or [])

        page_count = data.get("page_count")
        current = data.get("page", page)
        logger.debug(f"{service} {path}: page {current}/{page_count}")

        # Compteur local en garde-fou si le fournisseur renvoie toujours la meme page
        if page_count is None or max(current, page) >= page_count:
            break
        page += 1

    return items
