"""Éditeur de propriétés (valeurs individuelles, contrat "flow editor").

L'hôte fournit une liste de variables `{name, value}`; l'éditeur garde les
valeurs courantes, l'ensemble des tokens surchargés, et notifie chaque
modification sous forme de `ConfigurationChange`. Les tokens non surchargés
suivent le preset sélectionné.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Final

from loguru import logger

from ..config.core_field_defaults import (
    FIELD_DEFAULTS,
    INTEGER_FIELDS,
    TICKER_SPEED_ERROR,
    TICKER_SPEED_MAX,
    TICKER_SPEED_MIN,
    TOKEN_FIELDS,
)
from ..models.core_banner_models import DisplayMode
from ..theme.core_theme_contrast import readable_text_color, with_alpha
from ..theme.core_theme_presets import PRESET_FIELD_ATTRS, TokenPreset, TokenPresetCatalog
from ..theme.core_theme_resolution import normalize_mode, to_number, to_text
from ..theme.core_theme_tokens import ResolvedTokenSet, ThemeTokenComputer, format_seconds

INTEGER_TYPE: Final[str] = "Integer"
STRING_TYPE: Final[str] = "String"

MODE_OPTIONS: Final[tuple[dict[str, str], ...]] = (
    {"label": "Sticky", "value": DisplayMode.STICKY.value},
    {"label": "Ticker", "value": DisplayMode.TICKER.value},
)
PRESET_OPTIONS: Final[tuple[dict[str, str], ...]] = tuple(
    {"label": name.capitalize(), "value": name} for name in TokenPresetCatalog.preset_names()
)


@dataclass(frozen=True)
class ConfigurationChange:
    """Notification de modification envoyée à l'hôte."""

    name: str
    new_value: Any
    data_type: str


@dataclass(frozen=True)
class ValidationIssue:
    """Erreur de validation affichable."""

    field: str
    message: str


@dataclass(frozen=True)
class PreviewItem:
    """Élément d'aperçu du ticker."""

    variant: str
    title: str
    description: str
    color: str
    key: str
    style: str


def js_round(value: float) -> int:
    """Arrondi demi-supérieur (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def clamp_ticker_speed(value: float) -> int:
    """Arrondit puis borne la vitesse du ticker à [5, 180]."""
    return max(TICKER_SPEED_MIN, min(TICKER_SPEED_MAX, js_round(value)))


def _number_or_nan(value: Any) -> int | float:
    number = to_number(value)
    return int(number) if math.isfinite(number) and number.is_integer() else number


class PropertyEditor:
    """Éditeur des valeurs individuelles avec surcharge de tokens par preset."""

    def __init__(self, input_variables: Iterable[Mapping[str, Any]] | None = None) -> None:
        """Initialise l'éditeur.

        Args:
            input_variables: Variables `{name, value}` fournies par l'hôte
        """
        self._input_variables: list[Mapping[str, Any]] = []
        self.values: dict[str, Any] = dict(FIELD_DEFAULTS)
        self.overridden_token_fields: set[str] = set()
        self._listeners: list[Callable[[ConfigurationChange], None]] = []
        if input_variables is not None:
            self.set_input_variables(input_variables)

    # ------------------------------------------------------------------
    # Entrées
    # ------------------------------------------------------------------

    @property
    def input_variables(self) -> list[Mapping[str, Any]]:
        """Variables reçues de l'hôte."""
        return self._input_variables

    def set_input_variables(self, variables: Any) -> None:
        """Charge les variables de l'hôte et applique le preset aux tokens libres."""
        self._input_variables = list(variables) if isinstance(variables, list | tuple) else []
        self.overridden_token_fields = {
            name
            for name in (self._variable_name(variable) for variable in self._input_variables)
            if name in TOKEN_FIELDS
        }
        self.values = self.read_values(self._input_variables)
        self.apply_preset_to_non_overridden_tokens(self.values["tokenPreset"])
        logger.debug(
            f"[PropertyEditor] {len(self._input_variables)} variable(s), "
            f"{len(self.overridden_token_fields)} token(s) surchargé(s)"
        )

    @staticmethod
    def _variable_name(variable: Any) -> Any:
        return variable.get("name") if isinstance(variable, Mapping) else None

    def add_listener(self, callback: Callable[[ConfigurationChange], None]) -> None:
        """Enregistre un callback de notification de modification."""
        self._listeners.append(callback)

    def _dispatch_change(self, name: str, value: Any) -> None:
        change = ConfigurationChange(
            name=name,
            new_value=value,
            data_type=INTEGER_TYPE if name in INTEGER_FIELDS else STRING_TYPE,
        )
        logger.debug(f"[PropertyEditor] Changement: {change}")
        for callback in list(self._listeners):
            callback(change)

    # ------------------------------------------------------------------
    # Normalisation
    # ------------------------------------------------------------------

    @staticmethod
    def normalize_value(field_name: str, value: Any) -> Any:
        """Normalise une valeur saisie pour le champ donné."""
        if field_name == "mode":
            return normalize_mode(value).value
        if field_name == "tokenPreset":
            return TokenPresetCatalog.normalize_preset_name(value)
        if field_name in INTEGER_FIELDS:
            if value is None or value == "":
                return ""
            parsed = to_number(value)
            if not math.isfinite(parsed):
                return FIELD_DEFAULTS[field_name]
            return clamp_ticker_speed(parsed)

        normalized = to_text(value).strip()
        if field_name in TOKEN_FIELDS:
            return normalized
        return normalized or FIELD_DEFAULTS[field_name]

    def read_values(self, input_variables: Iterable[Any]) -> dict[str, Any]:
        """Construit les valeurs à partir des défauts et des variables connues."""
        next_values = dict(FIELD_DEFAULTS)
        for variable in input_variables:
            name = self._variable_name(variable)
            if name not in FIELD_DEFAULTS:
                continue
            raw_value = variable.get("value")
            if raw_value is None:
                continue
            next_values[name] = self.normalize_value(name, raw_value)
        return next_values

    def apply_preset_to_non_overridden_tokens(self, preset_name: str) -> None:
        """Recopie les valeurs du preset dans les tokens non surchargés."""
        preset = TokenPresetCatalog.get_preset(preset_name)
        next_values = dict(self.values)
        for field_name in TOKEN_FIELDS:
            if field_name not in self.overridden_token_fields:
                next_values[field_name] = preset.value_for(field_name)
        self.values = next_values

    # ------------------------------------------------------------------
    # Événements
    # ------------------------------------------------------------------

    def handle_field_change(self, field_name: str | None, raw_value: Any) -> None:
        """Applique une saisie utilisateur et notifie l'hôte."""
        if not field_name or field_name not in FIELD_DEFAULTS:
            return

        next_value = self.normalize_value(field_name, raw_value)
        dispatch_value = next_value

        if field_name == "tokenPreset":
            self.values = {**self.values, "tokenPreset": next_value}
            self.apply_preset_to_non_overridden_tokens(next_value)
            self._dispatch_change(field_name, next_value)
            return

        if field_name in TOKEN_FIELDS:
            if next_value == "":
                self.overridden_token_fields.discard(field_name)
                preset_value = self.preset.value_for(field_name)
                next_value = preset_value
                dispatch_value = int(preset_value) if field_name in INTEGER_FIELDS else ""
            else:
                self.overridden_token_fields.add(field_name)

        self.values = {**self.values, field_name: next_value}
        self._dispatch_change(field_name, dispatch_value)

    def reset_preset_overrides(self) -> None:
        """Supprime toutes les surcharges et revient aux valeurs du preset."""
        preset = self.preset
        next_values = dict(self.values)
        for field_name in TOKEN_FIELDS:
            self.overridden_token_fields.discard(field_name)
            preset_value = preset.value_for(field_name)
            next_values[field_name] = preset_value
            self._dispatch_change(field_name, int(preset_value) if field_name in INTEGER_FIELDS else "")
        self.values = next_values
        logger.info(f"[PropertyEditor] Surcharges réinitialisées (preset={preset.name})")

    # ------------------------------------------------------------------
    # Résolution et validation
    # ------------------------------------------------------------------

    @property
    def preset(self) -> TokenPreset:
        """Preset sélectionné."""
        return TokenPresetCatalog.get_preset(self.values.get("tokenPreset"))

    def resolve_token_field(self, field_name: str, preset_value: Any) -> Any:
        """Valeur surchargée si renseignée, sinon valeur du preset."""
        if field_name not in self.overridden_token_fields:
            return preset_value
        configured = self.values.get(field_name)
        if configured is None or configured == "":
            return preset_value
        return configured

    @property
    def resolved_tokens(self) -> ResolvedTokenSet:
        """Tokens tels que l'éditeur les prévisualise."""
        preset = self.preset
        resolved: dict[str, Any] = {"preset": preset.name}
        for field_name, attr in PRESET_FIELD_ATTRS.items():
            preset_value = preset.value_for(field_name)
            if field_name in TOKEN_FIELDS:
                resolved[attr] = self.resolve_token_field(field_name, preset_value)
            else:
                resolved[attr] = preset_value
        resolved["ticker_speed_seconds"] = _number_or_nan(resolved["ticker_speed_seconds"])
        return ResolvedTokenSet(**resolved)

    def validate(self) -> list[ValidationIssue]:
        """Vérifie la vitesse du ticker (bornes [5, 180])."""
        errors: list[ValidationIssue] = []
        speed = float(self.resolved_tokens.ticker_speed_seconds)
        if not math.isfinite(speed) or speed < TICKER_SPEED_MIN or speed > TICKER_SPEED_MAX:
            errors.append(ValidationIssue(field="tickerSpeedSeconds", message=TICKER_SPEED_ERROR))
        if errors:
            logger.warning(f"[PropertyEditor] Validation: {len(errors)} erreur(s)")
        return errors

    # ------------------------------------------------------------------
    # Aperçus
    # ------------------------------------------------------------------

    @property
    def sticky_preview_card_class(self) -> str:
        """Classe de la carte d'aperçu sticky."""
        active = self.values.get("mode") == DisplayMode.STICKY.value
        return "preview-card preview-card_active" if active else "preview-card"

    @property
    def ticker_preview_card_class(self) -> str:
        """Classe de la carte d'aperçu ticker."""
        active = self.values.get("mode") == DisplayMode.TICKER.value
        return "preview-card preview-card_active" if active else "preview-card"

    @property
    def sticky_preview_container_style(self) -> str:
        """Largeur du conteneur d'aperçu sticky."""
        return f"width: min(100%, {self.resolved_tokens.sticky_max_width});"

    @property
    def sticky_preview_banner_style(self) -> str:
        """Style de la bannière d'aperçu sticky (couleur info)."""
        tokens = self.resolved_tokens
        background_color = self.values.get("infoColor")
        return "; ".join(
            [
                f"border-radius: {tokens.sticky_border_radius}",
                f"box-shadow: {tokens.sticky_shadow}",
                f"background-color: {background_color}",
                f"color: {readable_text_color(background_color)}",
            ]
        )

    @property
    def ticker_preview_shell_style(self) -> str:
        """Style du cadre d'aperçu ticker."""
        tokens = self.resolved_tokens
        return "; ".join(
            [
                f"background-color: {tokens.ticker_background_color}",
                f"color: {tokens.ticker_text_color}",
                f"border-radius: {tokens.ticker_border_radius}",
                f"box-shadow: {tokens.ticker_shadow}",
                f"--preview-edge-fade-color: {tokens.ticker_edge_fade_color}",
                f"--preview-edge-fade-width: {tokens.ticker_edge_fade_width}",
            ]
        )

    @property
    def ticker_preview_track_style(self) -> str:
        """Style de la piste d'aperçu (durée et padding)."""
        tokens = self.resolved_tokens
        duration = ThemeTokenComputer.ticker_duration_seconds(tokens, len(self.ticker_preview_items))
        return "; ".join(
            [
                f"--bannerbuddy-preview-duration: {format_seconds(duration)}s",
                f"padding: {tokens.ticker_padding_y} 0",
            ]
        )

    @staticmethod
    def ticker_preview_item_style(color: Any) -> str:
        """Style d'un élément d'aperçu dérivé de sa couleur de variante."""
        return "; ".join(
            [
                f"background-color: {with_alpha(color, 0.22)}",
                f"color: {readable_text_color(color)}",
                f"border: 1px solid {with_alpha(color, 0.4)}",
            ]
        )

    @property
    def ticker_preview_items(self) -> list[PreviewItem]:
        """Quatre éléments d'exemple, un par variante."""
        samples = [
            ("Info", "Platform updates available", "Review release notes", self.values.get("infoColor")),
            ("Warning", "Maintenance tonight", "Starts at 11:00 PM", self.values.get("warningColor")),
            ("Success", "Deployment complete", "All checks passed", self.values.get("successColor")),
            ("Error", "Service disruption", "Investigating issue", self.values.get("errorColor")),
        ]
        return [
            PreviewItem(
                variant=variant,
                title=title,
                description=description,
                color=str(color),
                key=f"preview-{index}",
                style=self.ticker_preview_item_style(color),
            )
            for index, (variant, title, description, color) in enumerate(samples)
        ]

    @property
    def ticker_preview_loop_items(self) -> list[PreviewItem]:
        """Éléments d'aperçu suivis de leurs doublons (boucle continue)."""
        base_items = self.ticker_preview_items
        duplicates = [
            PreviewItem(
                variant=item.variant,
                title=item.title,
                description=item.description,
                color=item.color,
                key=f"preview-dup-{index}",
                style=item.style,
            )
            for index, item in enumerate(base_items)
        ]
        return [*base_items, *duplicates]
