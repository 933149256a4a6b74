"""Calcul des tokens de thème résolus et des variables CSS.

Façade: combine la résolution par couches, le catalogue de presets et
l'évaluation de contraste. Aucune E/S, aucune exception sur entrée invalide.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from loguru import logger

from ..config.core_field_defaults import DEFAULT_VARIANT_COLORS, TICKER_SECONDS_PER_ITEM
from ..models.core_banner_models import BannerVariant, DisplayMode
from .core_theme_contrast import readable_text_color
from .core_theme_presets import PRESET_FIELD_ATTRS, TokenPresetCatalog
from .core_theme_resolution import (
    RESOLVABLE_TOKEN_KINDS,
    ConfigResolver,
    normalize_mode,
    normalize_token,
    to_text,
)

CSS_VARIABLE_PREFIX = "--bannerbuddy"


@dataclass(frozen=True)
class ResolvedTokenSet:
    """Valeur concrète de chaque token après résolution."""

    # pylint: disable=too-many-instance-attributes

    preset: str
    sticky_top_offset: str
    sticky_width: str
    sticky_max_width: str
    sticky_border_radius: str
    sticky_shadow: str
    ticker_background_color: str
    ticker_text_color: str
    ticker_edge_fade_color: str
    ticker_edge_fade_width: str
    ticker_item_background_color: str
    ticker_item_border_radius: str
    ticker_item_gap: str
    ticker_padding_y: str
    ticker_item_padding: str
    ticker_speed_seconds: int | float
    ticker_shadow: str
    ticker_border_radius: str


@dataclass(frozen=True)
class VariantColors:
    """Couleurs de fond résolues par variante."""

    info: str
    error: str
    warning: str
    success: str

    def for_variant(self, variant: str | None) -> str:
        """Couleur de la variante; variante inconnue ou vide -> info."""
        return {
            BannerVariant.INFO.value: self.info,
            BannerVariant.ERROR.value: self.error,
            BannerVariant.WARNING.value: self.warning,
            BannerVariant.SUCCESS.value: self.success,
        }.get(variant or BannerVariant.INFO.value, self.info)


def format_seconds(value: int | float) -> str:
    """Formate une durée en secondes sans décimale inutile."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _individual(individual_values: Mapping[str, Any] | None, field_name: str, default: Any = None) -> Any:
    if not individual_values:
        return default
    return individual_values.get(field_name, default)


class ThemeTokenComputer:
    """Produit les tokens résolus, les couleurs de variantes et les chaînes CSS."""

    @staticmethod
    def resolve_preset_name(grouped_config: Any, individual_values: Mapping[str, Any] | None = None) -> str:
        """Nom du preset actif (précédence par couches puis normalisation)."""
        raw = ConfigResolver.resolve("tokenPreset", grouped_config, _individual(individual_values, "tokenPreset"))
        return TokenPresetCatalog.normalize_preset_name(raw)

    @staticmethod
    def resolve_mode(grouped_config: Any, individual_values: Mapping[str, Any] | None = None) -> DisplayMode:
        """Mode d'affichage résolu (sticky par défaut)."""
        return normalize_mode(ConfigResolver.resolve("mode", grouped_config, _individual(individual_values, "mode")))

    @staticmethod
    def compute_tokens(
        grouped_config: Any,
        individual_values: Mapping[str, Any] | None = None,
        preset_name: str | None = None,
    ) -> ResolvedTokenSet:
        """Résout tous les tokens.

        Args:
            grouped_config: Configuration groupée (mapping, None ou autre)
            individual_values: Valeurs individuelles indexées par nom de champ
            preset_name: Preset imposé; sinon résolu via `tokenPreset`

        Returns:
            Jeu de tokens complet
        """
        if preset_name is None:
            preset_name = ThemeTokenComputer.resolve_preset_name(grouped_config, individual_values)
        preset = TokenPresetCatalog.get_preset(preset_name)

        values: dict[str, Any] = {"preset": preset.name}
        for field_name, attr in PRESET_FIELD_ATTRS.items():
            preset_value = preset.value_for(field_name)
            kind = RESOLVABLE_TOKEN_KINDS.get(field_name)
            if kind is None:
                values[attr] = preset_value
                continue
            raw = ConfigResolver.resolve(field_name, grouped_config, _individual(individual_values, field_name))
            values[attr] = normalize_token(kind, raw, preset_value)

        tokens = ResolvedTokenSet(**values)
        logger.debug(f"[ThemeTokenComputer] Tokens résolus (preset={tokens.preset})")
        return tokens

    @staticmethod
    def compute_variant_colors(
        grouped_config: Any,
        individual_values: Mapping[str, Any] | None = None,
    ) -> VariantColors:
        """Couleurs de variantes: groupée -> individuelle -> constante."""
        resolved: dict[str, str] = {}
        for field_name, fallback in DEFAULT_VARIANT_COLORS.items():
            raw = ConfigResolver.resolve(
                field_name, grouped_config, _individual(individual_values, field_name, fallback)
            )
            resolved[field_name] = to_text(raw) or fallback
        return VariantColors(
            info=resolved["infoColor"],
            error=resolved["errorColor"],
            warning=resolved["warningColor"],
            success=resolved["successColor"],
        )

    @staticmethod
    def ticker_duration_seconds(tokens: ResolvedTokenSet, item_count: int) -> int | float:
        """Durée de défilement: jamais moins de 6 s par élément."""
        return max(tokens.ticker_speed_seconds, item_count * TICKER_SECONDS_PER_ITEM)

    @staticmethod
    def ticker_track_style(tokens: ResolvedTokenSet, item_count: int) -> str:
        """Style de la piste ticker (durée d'animation)."""
        duration = ThemeTokenComputer.ticker_duration_seconds(tokens, item_count)
        return f"{CSS_VARIABLE_PREFIX}-ticker-duration: {format_seconds(duration)}s;"

    @staticmethod
    def banner_style(variant: str | None, variant_colors: VariantColors) -> str:
        """Style inline d'une bannière sticky pour sa variante."""
        background_color = variant_colors.for_variant(variant)
        text_color = readable_text_color(background_color)
        return f"background-color: {background_color} !important; color: {text_color} !important;"

    @staticmethod
    def compute_css_variable_string(tokens: ResolvedTokenSet, variant_colors: VariantColors) -> str:
        """Déclarations de propriétés CSS personnalisées, jointes par `; `."""
        declarations = [
            ("sticky-top-offset", tokens.sticky_top_offset),
            ("sticky-width", tokens.sticky_width),
            ("sticky-max-width", tokens.sticky_max_width),
            ("sticky-radius", tokens.sticky_border_radius),
            ("sticky-shadow", tokens.sticky_shadow),
            ("ticker-bg", tokens.ticker_background_color),
            ("ticker-text", tokens.ticker_text_color),
            ("edge-overlay", tokens.ticker_edge_fade_color),
            ("edge-fade-width", tokens.ticker_edge_fade_width),
            ("ticker-item-bg", tokens.ticker_item_background_color),
            ("ticker-item-radius", tokens.ticker_item_border_radius),
            ("ticker-item-gap", tokens.ticker_item_gap),
            ("ticker-padding-y", tokens.ticker_padding_y),
            ("ticker-item-padding", tokens.ticker_item_padding),
            ("ticker-shadow", tokens.ticker_shadow),
            ("ticker-radius", tokens.ticker_border_radius),
        ]
        for variant, color in (
            ("info", variant_colors.info),
            ("error", variant_colors.error),
            ("warning", variant_colors.warning),
            ("success", variant_colors.success),
        ):
            declarations.append((f"{variant}-bg", color))
            declarations.append((f"{variant}-text", readable_text_color(color)))

        return "; ".join(f"{CSS_VARIABLE_PREFIX}-{name}: {value}" for name, value in declarations)
