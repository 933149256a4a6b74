"""Presets de tokens visuels et catalogue."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from types import MappingProxyType
from typing import ClassVar


class PresetName(str, Enum):
    """Presets disponibles."""

    DEFAULT = "default"
    COMPACT = "compact"
    BROADCAST = "broadcast"


def _camel_case(attr_name: str) -> str:
    head, *rest = attr_name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass(frozen=True)
class TokenPreset:
    """Bundle immuable de valeurs par défaut des tokens."""

    # pylint: disable=too-many-instance-attributes

    name: str
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
    ticker_speed_seconds: int
    ticker_shadow: str
    ticker_border_radius: str

    def value_for(self, field_name: str) -> str | int:
        """Retourne la valeur d'un champ par son nom de configuration (camelCase).

        Raises:
            KeyError: si le champ n'existe dans aucun preset
        """
        return getattr(self, PRESET_FIELD_ATTRS[field_name])

    def as_dict(self) -> dict[str, str | int]:
        """Retourne les valeurs indexées par nom de configuration."""
        return {field_name: getattr(self, attr) for field_name, attr in PRESET_FIELD_ATTRS.items()}


# camelCase (clé de configuration) -> attribut
PRESET_FIELD_ATTRS = MappingProxyType(
    {_camel_case(f.name): f.name for f in fields(TokenPreset) if f.name != "name"}
)


class TokenPresetCatalog:
    """Catalogue des presets; ajouter un preset = ajouter une entrée."""

    PRESETS: ClassVar[dict[PresetName, TokenPreset]] = {
        PresetName.DEFAULT: TokenPreset(
            name="default",
            sticky_top_offset="10px",
            sticky_width="90%",
            sticky_max_width="800px",
            sticky_border_radius="20px",
            sticky_shadow="0 4px 12px rgba(0, 0, 0, 0.15)",
            ticker_background_color="#0f172a",
            ticker_text_color="#f8fafc",
            ticker_edge_fade_color="#0f172a",
            ticker_edge_fade_width="4.5rem",
            ticker_item_background_color="rgba(255, 255, 255, 0.14)",
            ticker_item_border_radius="999px",
            ticker_item_gap="1.25rem",
            ticker_padding_y="0.65rem",
            ticker_item_padding="0.3rem 0.75rem",
            ticker_speed_seconds=28,
            ticker_shadow="0 8px 24px rgba(0, 0, 0, 0.2)",
            ticker_border_radius="999px",
        ),
        PresetName.COMPACT: TokenPreset(
            name="compact",
            sticky_top_offset="8px",
            sticky_width="96%",
            sticky_max_width="900px",
            sticky_border_radius="12px",
            sticky_shadow="0 4px 10px rgba(0, 0, 0, 0.12)",
            ticker_background_color="#111827",
            ticker_text_color="#e5e7eb",
            ticker_edge_fade_color="#111827",
            ticker_edge_fade_width="3rem",
            ticker_item_background_color="rgba(255, 255, 255, 0.1)",
            ticker_item_border_radius="10px",
            ticker_item_gap="0.75rem",
            ticker_padding_y="0.45rem",
            ticker_item_padding="0.2rem 0.5rem",
            ticker_speed_seconds=24,
            ticker_shadow="0 6px 18px rgba(0, 0, 0, 0.16)",
            ticker_border_radius="12px",
        ),
        PresetName.BROADCAST: TokenPreset(
            name="broadcast",
            sticky_top_offset="14px",
            sticky_width="100%",
            sticky_max_width="1200px",
            sticky_border_radius="24px",
            sticky_shadow="0 10px 28px rgba(0, 0, 0, 0.22)",
            ticker_background_color="#020617",
            ticker_text_color="#ffffff",
            ticker_edge_fade_color="#020617",
            ticker_edge_fade_width="6rem",
            ticker_item_background_color="rgba(255, 255, 255, 0.18)",
            ticker_item_border_radius="999px",
            ticker_item_gap="1.6rem",
            ticker_padding_y="0.75rem",
            ticker_item_padding="0.35rem 0.9rem",
            ticker_speed_seconds=34,
            ticker_shadow="0 12px 36px rgba(0, 0, 0, 0.28)",
            ticker_border_radius="999px",
        ),
    }

    @staticmethod
    def normalize_preset_name(name: object) -> str:
        """Normalise un nom de preset (trim + minuscules), `default` si inconnu."""
        normalized = str(name or "").strip().lower()
        for preset_name in TokenPresetCatalog.PRESETS:
            if preset_name.value == normalized:
                return normalized
        return PresetName.DEFAULT.value

    @staticmethod
    def get_preset(name: object) -> TokenPreset:
        """Retourne le preset demandé, `default` si inconnu."""
        return TokenPresetCatalog.PRESETS[PresetName(TokenPresetCatalog.normalize_preset_name(name))]

    @staticmethod
    def preset_names() -> tuple[str, ...]:
        """Noms des presets dans l'ordre du catalogue."""
        return tuple(preset_name.value for preset_name in TokenPresetCatalog.PRESETS)
