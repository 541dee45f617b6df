"""
Exceptions du domaine Vitrine.

Chaque exception porte un code stable expose aux appelants (UI, CLI):
- CONFIGURATION_MISSING : secret ou identifiant absent, jamais relance
- NOT_FOUND : la ressource logique demandee n'existe pas chez le fournisseur
- UPSTREAM_ERROR : statut HTTP non-2xx ou echec reseau sur un appel requis
"""

from typing import Optional


class VitrineError(Exception):
    """
    Exception de base pour les operations d'agregation.

    Attributes:
        code: Code stable ("CONFIGURATION_MISSING", "NOT_FOUND", "UPSTREAM_ERROR")
        message: Message lisible par un humain
    """

    code = "INTERNAL_ERROR"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, str]:
        """Representation JSON de l'erreur."""
        return {"code": self.code, "message": self.message}


class ConfigurationError(VitrineError):
    """Secret, cle API ou jeton requis absent."""

    code = "CONFIGURATION_MISSING"


class AuthRefreshError(ConfigurationError):
    """Le endpoint OAuth a refuse (ou n'a pas pu traiter) le refresh token."""


class NotFoundError(VitrineError):
    """Ressource logique introuvable (dossier, utilisateur...)."""

    code = "NOT_FOUND"


class UpstreamError(VitrineError):
    """
    Statut non-2xx retourne par une API tierce sur un appel requis.

    Attributes:
        status_code: Statut HTTP recu (None pour un echec reseau)
        body: Corps de la reponse tronque, si disponible
        service: Nom du service appele
    """

    code = "UPSTREAM_ERROR"

    def __init__(
        self,
        service: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        self.service = service
        self.status_code = status_code
        self.body = body[:200] if body else body
        if message is None:
            message = f"{service} API error: {status_code}"
            if self.body:
                message += f" {self.body}"
        super().__init__(message)


class AuthExpiredError(UpstreamError):
    """401 persistant apres un refresh reussi."""

    def __init__(self, service: str, body: Optional[str] = None) -> None:
        super().__init__(
            service,
            status_code=401,
            body=body,
            message=f"{service} API error: 401 (token still rejected after refresh)",
        )


class TransportError(UpstreamError):
    """Echec reseau ou reponse illisible sur le chemin principal."""

    def __init__(self, service: str, reason: str) -> None:
        super().__init__(service, message=f"{service} unreachable: {reason}")
