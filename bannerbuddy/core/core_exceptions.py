"""Module d'exceptions personnalisées pour Banner Buddy.

Le moteur de résolution/thème ne lève jamais: les valeurs invalides sont
normalisées silencieusement. Ces exceptions couvrent uniquement les bords
du système (payload du fournisseur de données, fichiers de configuration CLI).
"""

from __future__ import annotations


class BannerBuddyError(Exception):
    """Exception de base pour toutes les erreurs de Banner Buddy.

    Example:
        try:
            records = parse_banner_response(payload)
        except BannerBuddyError as e:
            logger.error(f"Erreur bannières: {e}")
    """


class BannerPayloadError(BannerBuddyError):
    """Payload du fournisseur de données mal formé.

    Levée par le parsing de la réponse GraphQL lorsque la structure
    `data.uiapi.query.Banner_Buddy__c.edges` est absente ou invalide.

    Attributes:
        path: Chemin (notation pointée) de l'élément fautif, si connu
    """

    def __init__(self, message: str, path: str | None = None):
        """Initialise BannerPayloadError avec le chemin fautif.

        Args:
            message: Message d'erreur descriptif
            path: Chemin dans le payload (optionnel)
        """
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        """Représentation textuelle enrichie de l'erreur."""
        base = super().__str__()
        if self.path:
            return f"{base} | Chemin: {self.path}"
        return base


class BannerConfigError(BannerBuddyError):
    """Fichier de configuration illisible ou mal structuré.

    Example:
        if not isinstance(data, dict):
            raise BannerConfigError(f"Configuration invalide: {path}")
    """
