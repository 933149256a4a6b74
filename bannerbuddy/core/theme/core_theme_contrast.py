"""Contraste texte/fond pour les couleurs hexadécimales."""

from __future__ import annotations

import re
from typing import Final

DARK_TEXT_COLOR: Final[str] = "#080707"
LIGHT_TEXT_COLOR: Final[str] = "#ffffff"

# Au-delà de ce seuil de luminance, le fond est jugé clair
LUMINANCE_THRESHOLD: Final[float] = 0.6

_SHORT_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3})$")
_LONG_HEX_RE = re.compile(r"^#([0-9a-fA-F]{6})$")


def parse_hex_color(color: object) -> tuple[int, int, int] | None:
    """Convertit `#RGB` / `#RRGGBB` en canaux (0-255).

    Args:
        color: Valeur brute (les espaces autour sont ignorés)

    Returns:
        Tuple (r, g, b) ou None si le format n'est pas reconnu
    """
    normalized = str(color or "").strip()

    short_match = _SHORT_HEX_RE.match(normalized)
    if short_match:
        hex_value = "".join(char * 2 for char in short_match.group(1))
    else:
        long_match = _LONG_HEX_RE.match(normalized)
        if not long_match:
            return None
        hex_value = long_match.group(1)

    return int(hex_value[0:2], 16), int(hex_value[2:4], 16), int(hex_value[4:6], 16)


def relative_luminance(rgb: tuple[int, int, int]) -> float:
    """Luminance relative (coefficients Rec. 709, sans linéarisation)."""
    r, g, b = (channel / 255 for channel in rgb)
    return (0.2126 * r) + (0.7152 * g) + (0.0722 * b)


def readable_text_color(color: object) -> str:
    """Retourne la couleur de texte lisible sur le fond donné.

    Tout format non hexadécimal (rgb(), nom CSS, vide...) retombe sur le
    texte clair.
    """
    rgb = parse_hex_color(color)
    if rgb is None:
        return LIGHT_TEXT_COLOR
    return DARK_TEXT_COLOR if relative_luminance(rgb) > LUMINANCE_THRESHOLD else LIGHT_TEXT_COLOR


def with_alpha(color: object, alpha: float) -> str:
    """Convertit une couleur hex en `rgba(r, g, b, alpha)`.

    Les couleurs non hexadécimales sont retournées nettoyées (trim).
    """
    rgb = parse_hex_color(color)
    if rgb is None:
        return str(color or "").strip()
    r, g, b = rgb
    return f"rgba({r}, {g}, {b}, {alpha})"
