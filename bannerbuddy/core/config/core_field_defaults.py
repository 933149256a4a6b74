"""Valeurs par défaut et constantes des champs configurables."""

from __future__ import annotations

from types import MappingProxyType
from typing import Final

DEFAULT_MODE: Final[str] = "sticky"
DEFAULT_PRESET: Final[str] = "default"

# Délai fixe avant rotation automatique d'une bannière sticky
AUTO_DISMISS_DELAY_MS: Final[int] = 15000

# Une bannière ticker ne défile jamais plus vite que 6 s par élément
TICKER_SECONDS_PER_ITEM: Final[int] = 6

TICKER_SPEED_MIN: Final[int] = 5
TICKER_SPEED_MAX: Final[int] = 180
TICKER_SPEED_ERROR: Final[str] = (
    f"Ticker Base Speed (s) must be between {TICKER_SPEED_MIN} and {TICKER_SPEED_MAX}."
)

# Clé sessionStorage (tableau JSON d'IDs)
DISMISSED_BANNERS_KEY: Final[str] = "dismissedBanners"

DEFAULT_VARIANT_COLORS: Final = MappingProxyType(
    {
        "infoColor": "#6d5bf6",
        "errorColor": "#c23934",
        "warningColor": "#ff9e2c",
        "successColor": "#08ca4a",
    }
)

# Valeurs initiales des éditeurs (reflètent le preset `default`)
FIELD_DEFAULTS: Final = MappingProxyType(
    {
        "mode": DEFAULT_MODE,
        "tokenPreset": DEFAULT_PRESET,
        "stickyTopOffset": "10px",
        "stickyWidth": "90%",
        "stickyMaxWidth": "800px",
        "stickyBorderRadius": "20px",
        "stickyShadow": "0 4px 12px rgba(0, 0, 0, 0.15)",
        "tickerBackgroundColor": "#0f172a",
        "tickerTextColor": "#f8fafc",
        "tickerEdgeFadeColor": "#0f172a",
        "tickerEdgeFadeWidth": "4.5rem",
        "tickerItemBackgroundColor": "rgba(255, 255, 255, 0.14)",
        "tickerSpeedSeconds": 28,
        **DEFAULT_VARIANT_COLORS,
    }
)

# Champs de tokens surchargeables individuellement (le reste vient du preset)
TOKEN_FIELDS: Final[tuple[str, ...]] = (
    "stickyTopOffset",
    "stickyWidth",
    "stickyMaxWidth",
    "stickyBorderRadius",
    "stickyShadow",
    "tickerBackgroundColor",
    "tickerTextColor",
    "tickerEdgeFadeColor",
    "tickerEdgeFadeWidth",
    "tickerItemBackgroundColor",
    "tickerSpeedSeconds",
)

INTEGER_FIELDS: Final[frozenset[str]] = frozenset({"tickerSpeedSeconds"})
