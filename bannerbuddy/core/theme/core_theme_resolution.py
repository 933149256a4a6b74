"""Résolution de configuration par couches et normalisation des valeurs.

Précédence (la plus forte d'abord):
1. configuration groupée (mapping), si la valeur est définie et non vide;
2. valeur individuelle (éventuellement None);
3. défaut du preset, appliqué par les normaliseurs.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, Final

from ..models.core_banner_models import DisplayMode

# Chiffres ASCII uniquement: "١٢" n'est ni une longueur CSS ni un nombre
_BARE_NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$", re.ASCII)
_NUMERIC_TEXT_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$", re.ASCII)


class TokenKind(Enum):
    """Type sémantique d'un champ de token (choisit le normaliseur)."""

    LENGTH = "length"
    STRING = "string"
    POSITIVE_NUMBER = "positive_number"


# Champs résolus par couches; les autres tokens viennent uniquement du preset
RESOLVABLE_TOKEN_KINDS: Final = MappingProxyType(
    {
        "stickyTopOffset": TokenKind.LENGTH,
        "stickyWidth": TokenKind.LENGTH,
        "stickyMaxWidth": TokenKind.LENGTH,
        "stickyBorderRadius": TokenKind.LENGTH,
        "stickyShadow": TokenKind.STRING,
        "tickerBackgroundColor": TokenKind.STRING,
        "tickerTextColor": TokenKind.STRING,
        "tickerEdgeFadeColor": TokenKind.STRING,
        "tickerEdgeFadeWidth": TokenKind.LENGTH,
        "tickerItemBackgroundColor": TokenKind.STRING,
        "tickerSpeedSeconds": TokenKind.POSITIVE_NUMBER,
    }
)


def is_configured(value: Any) -> bool:
    """True si la valeur compte comme renseignée (ni None ni chaîne vide)."""
    return value is not None and not (isinstance(value, str) and value == "")


def resolve_first(lookups: Iterable[Callable[[], Any]], default: Any = None) -> Any:
    """Évalue les lookups dans l'ordre et retourne la première valeur renseignée."""
    for lookup in lookups:
        value = lookup()
        if is_configured(value):
            return value
    return default


class ConfigResolver:
    """Résout un champ à partir de la configuration groupée et de la valeur individuelle."""

    @staticmethod
    def grouped_value(field_name: str, grouped_config: Any) -> Any:
        """Valeur brute du champ dans la configuration groupée (None si absente)."""
        if isinstance(grouped_config, Mapping):
            return grouped_config.get(field_name)
        return None

    @staticmethod
    def resolve(field_name: str, grouped_config: Any, individual_value: Any = None) -> Any:
        """Retourne la valeur groupée si renseignée, sinon la valeur individuelle."""
        return resolve_first(
            (lambda: ConfigResolver.grouped_value(field_name, grouped_config),),
            default=individual_value,
        )


def to_text(value: Any) -> str:
    """Convertit une valeur brute en texte; les valeurs "fausses" donnent ''."""
    if not value:
        return ""
    if isinstance(value, bool):
        return "true"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, int):
        try:
            return str(value)
        except ValueError:
            # Au-delà de la limite de conversion int -> str de l'interpréteur
            return "Infinity" if value > 0 else "-Infinity"
    return str(value)


def to_number(value: Any) -> float:
    """Coerce une valeur brute en nombre (NaN si impossible)."""
    if value is None:
        return math.nan
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, float):
        return value
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            # Entier hors de portée d'un float: infini, donc rejeté par les normaliseurs
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if _NUMERIC_TEXT_RE.match(text):
            return float(text)
        return math.nan
    return math.nan


def normalize_string(value: Any, fallback: Any) -> Any:
    """Trim; vide -> fallback."""
    normalized = to_text(value).strip()
    return normalized or fallback


def normalize_length(value: Any, fallback: Any) -> Any:
    """Trim; vide -> fallback; nombre nu -> suffixe `px`; sinon inchangé."""
    normalized = to_text(value).strip()
    if not normalized:
        return fallback
    if _BARE_NUMBER_RE.match(normalized):
        return f"{normalized}px"
    return normalized


def normalize_positive_number(value: Any, fallback: Any) -> Any:
    """Nombre fini strictement positif, sinon fallback.

    Les valeurs entières sont retournées en `int` (28 et non 28.0).
    """
    number = to_number(value)
    if not math.isfinite(number) or number <= 0:
        return fallback
    return int(number) if number.is_integer() else number


def normalize_mode(value: Any) -> DisplayMode:
    """`ticker` (insensible à la casse) -> TICKER, tout le reste -> STICKY."""
    normalized = to_text(value).strip().lower()
    return DisplayMode.TICKER if normalized == DisplayMode.TICKER.value else DisplayMode.STICKY


_NORMALIZERS: Final[dict[TokenKind, Callable[[Any, Any], Any]]] = {
    TokenKind.LENGTH: normalize_length,
    TokenKind.STRING: normalize_string,
    TokenKind.POSITIVE_NUMBER: normalize_positive_number,
}


def normalize_token(kind: TokenKind, value: Any, fallback: Any) -> Any:
    """Applique le normaliseur associé au type de token."""
    return _NORMALIZERS[kind](value, fallback)
