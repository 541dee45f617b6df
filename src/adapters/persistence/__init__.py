"""
Implementations du credential store.

- DiskCredentialStore : diskcache local (SQLite), ecriture atomique
- DirectusCredentialStore : singleton Directus via l'API REST
"""

from src.adapters.persistence.credential_store import (
    DirectusCredentialStore,
    DiskCredentialStore,
)

__all__ = [
    "DirectusCredentialStore",
    "DiskCredentialStore",
]
