"""Modèles de données des bannières."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BannerStatus(str, Enum):
    """Statuts connus d'un enregistrement de bannière."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"


class BannerVariant(str, Enum):
    """Variantes visuelles d'une bannière."""

    INFO = "Info"
    ERROR = "Error"
    WARNING = "Warning"
    SUCCESS = "Success"

    @classmethod
    def from_value(cls, value: str | None) -> BannerVariant:
        """Retourne la variante correspondante, `INFO` si inconnue ou vide."""
        for variant in cls:
            if variant.value == value:
                return variant
        return cls.INFO


class DisplayMode(str, Enum):
    """Mode d'affichage du composant."""

    STICKY = "sticky"
    TICKER = "ticker"


@dataclass(frozen=True)
class BannerRecord:
    """Enregistrement de bannière tel que fourni par la source de données.

    `status` et `variant` restent des chaînes brutes: une valeur inconnue
    côté source ne doit pas empêcher le chargement.
    """

    # pylint: disable=too-many-instance-attributes

    id: str | None = None
    name: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    status: str | None = None
    variant: str | None = None
    title: str | None = None
    description: str | None = None
    message: str | None = None
    link_url: str | None = None

    @property
    def is_active(self) -> bool:
        """True si le statut est `Active`."""
        return self.status == BannerStatus.ACTIVE.value

    @property
    def is_empty(self) -> bool:
        """True pour le placeholder "rien à afficher"."""
        return self.id is None

    @property
    def has_message(self) -> bool:
        """True si un message non vide est présent."""
        return bool(self.message)


# Placeholder retourné quand aucune bannière n'est affichable
EMPTY_BANNER = BannerRecord()
