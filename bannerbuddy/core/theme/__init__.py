"""Moteur de thème des bannières (presets, résolution, contraste, tokens).

API publique: importer depuis `bannerbuddy.core.theme`.
"""

from .core_theme_contrast import DARK_TEXT_COLOR, LIGHT_TEXT_COLOR, readable_text_color, with_alpha
from .core_theme_presets import PresetName, TokenPreset, TokenPresetCatalog
from .core_theme_resolution import (
    ConfigResolver,
    TokenKind,
    normalize_length,
    normalize_mode,
    normalize_positive_number,
    normalize_string,
)
from .core_theme_tokens import ResolvedTokenSet, ThemeTokenComputer, VariantColors

__all__ = [
    "DARK_TEXT_COLOR",
    "LIGHT_TEXT_COLOR",
    "ConfigResolver",
    "PresetName",
    "ResolvedTokenSet",
    "ThemeTokenComputer",
    "TokenKind",
    "TokenPreset",
    "TokenPresetCatalog",
    "VariantColors",
    "normalize_length",
    "normalize_mode",
    "normalize_positive_number",
    "normalize_string",
    "readable_text_color",
    "with_alpha",
]
