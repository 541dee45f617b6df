"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

- ICredentialStore : Stockage des jetons OAuth (copie canonique)
"""

from src.core.ports.credential_store import ICredentialStore

__all__ = [
    "ICredentialStore",
]
