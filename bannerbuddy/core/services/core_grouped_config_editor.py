"""Éditeur de configuration groupée (objet unique `bannerConfig`).

Chaque modification produit une nouvelle copie complète du mapping, envoyée
aux listeners; l'hôte la stocke telle quelle et la repasse au composant.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from loguru import logger

from ..config.core_field_defaults import FIELD_DEFAULTS, INTEGER_FIELDS
from ..models.core_banner_models import DisplayMode

_LEADING_INT_RE = re.compile(r"^[+-]?\d+", re.ASCII)


@dataclass(frozen=True)
class ErrorMessage:
    """Message d'erreur affichable transmis par l'hôte."""

    key: str
    message: str


def parse_leading_int(raw: Any) -> int | None:
    """Entier en tête de la saisie (`"12.7s"` -> 12), None si absent."""
    match = _LEADING_INT_RE.match(str(raw).strip()) if raw is not None else None
    return int(match.group(0)) if match else None


class GroupedConfigEditor:
    """Édite la configuration groupée d'une instance de composant."""

    def __init__(self, value: Any = None, *, label: str = "", errors: list[Any] | None = None) -> None:
        """Initialise l'éditeur.

        Args:
            value: Configuration groupée initiale (copiée)
            label: Libellé affiché par l'hôte
            errors: Erreurs de validation transmises par l'hôte
        """
        self.label = label
        self.errors = errors
        self._value: dict[str, Any] = {}
        self._listeners: list[Callable[[dict[str, Any]], None]] = []
        self.value = value

    @property
    def value(self) -> dict[str, Any]:
        """Configuration groupée courante."""
        return self._value

    @value.setter
    def value(self, val: Any) -> None:
        self._value = dict(val) if isinstance(val, Mapping) else {}

    def add_listener(self, callback: Callable[[dict[str, Any]], None]) -> None:
        """Enregistre un callback recevant la configuration complète après modification."""
        self._listeners.append(callback)

    def field_value(self, field_name: str) -> Any:
        """Valeur du champ, ou sa valeur par défaut si absente/None."""
        value = self._value.get(field_name)
        return FIELD_DEFAULTS[field_name] if value is None else value

    @property
    def current_mode(self) -> str:
        """Mode sélectionné (sticky par défaut)."""
        return self._value.get("mode") or FIELD_DEFAULTS["mode"]

    @property
    def current_preset(self) -> str:
        """Preset sélectionné (`default` par défaut)."""
        return self._value.get("tokenPreset") or FIELD_DEFAULTS["tokenPreset"]

    @property
    def is_sticky_mode(self) -> bool:
        """True si le mode sélectionné est sticky."""
        return self.current_mode == DisplayMode.STICKY.value

    @property
    def is_ticker_mode(self) -> bool:
        """True si le mode sélectionné est ticker."""
        return self.current_mode == DisplayMode.TICKER.value

    @property
    def has_errors(self) -> bool:
        """True si l'hôte a transmis au moins une erreur."""
        return isinstance(self.errors, list) and len(self.errors) > 0

    @property
    def error_messages(self) -> list[ErrorMessage]:
        """Erreurs de l'hôte mises en forme."""
        if not self.has_errors:
            return []
        messages = []
        for index, err in enumerate(self.errors or []):
            message = err.get("message") if isinstance(err, Mapping) else None
            messages.append(ErrorMessage(key=f"err-{index}", message=message or str(err)))
        return messages

    def handle_mode_change(self, value: Any) -> None:
        """Sélection d'un mode."""
        self.update_field("mode", value)

    def handle_preset_change(self, value: Any) -> None:
        """Sélection d'un preset."""
        self.update_field("tokenPreset", value)

    def handle_field_blur(self, field_name: str | None, raw: Any) -> None:
        """Validation d'une saisie texte (perte de focus)."""
        if not field_name:
            return
        if field_name in INTEGER_FIELDS:
            parsed = parse_leading_int(raw)
            self.update_field(field_name, parsed if parsed is not None else FIELD_DEFAULTS[field_name])
        else:
            self.update_field(field_name, raw)

    def update_field(self, field_name: str, field_value: Any) -> None:
        """Remplace un champ et notifie la configuration complète."""
        next_value = {**self._value, field_name: field_value}
        self._value = next_value
        logger.debug(f"[GroupedConfigEditor] {field_name} = {field_value!r}")
        for callback in list(self._listeners):
            callback(dict(next_value))
