"""
Port du credential store.

Le stockage des jetons OAuth est un singleton cle-valeur externe. Une
ecriture doit etre atomique: aucune mise a jour partielle n'est visible.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.core.entities.credentials import Credentials


class ICredentialStore(ABC):
    """Interface de lecture/ecriture de la copie canonique des credentials."""

    @abstractmethod
    async def read(self) -> Optional[Credentials]:
        """
        Lit les credentials persistes.

        Returns:
            Credentials, ou None si aucun jeton n'a encore ete enregistre
        """
        ...

    @abstractmethod
    async def write(self, credentials: Credentials) -> None:
        """
        Remplace atomiquement les credentials persistes.

        Args:
            credentials: Nouvelle paire de jetons
        """
        ...

    async def close(self) -> None:
        """Libere les ressources du stockage (connexion, client HTTP)."""
