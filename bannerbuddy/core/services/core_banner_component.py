"""Composant bannière: façade entre données, cycle de vie, thème et vue.

Le composant possède le contrôleur de cycle de vie, recalcule les tokens à
partir de la configuration courante et produit un `BannerView` prêt à être
rendu (champs de la bannière, styles calculés, variables CSS).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Any, Final

from loguru import logger

from ..io.core_banner_provider import BannerProvider
from ..io.core_session_storage import DismissalStore
from ..managers.core_banner_lifecycle import BannerLifecycleController, TimerScheduler
from ..models.core_banner_models import BannerRecord, BannerVariant
from ..theme.core_theme_tokens import ResolvedTokenSet, ThemeTokenComputer, VariantColors

TICKER_ITEM_CLASS: Final[str] = "ticker-item"

BANNER_CLASSES: Final = MappingProxyType(
    {
        BannerVariant.INFO.value: "slds-notify slds-notify_alert slds-alert_info",
        BannerVariant.ERROR.value: "slds-notify slds-notify_alert slds-alert_error",
        BannerVariant.WARNING.value: "slds-notify slds-notify_alert slds-alert_warning",
        BannerVariant.SUCCESS.value: "slds-notify slds-notify_alert slds-theme_success",
    }
)

ICON_NAMES: Final = MappingProxyType(
    {
        BannerVariant.INFO.value: "utility:info",
        BannerVariant.ERROR.value: "utility:error",
        BannerVariant.WARNING.value: "utility:warning",
        BannerVariant.SUCCESS.value: "utility:success",
    }
)


@dataclass(frozen=True)
class BannerViewModel:
    """Bannière prête à rendre: champs de l'enregistrement + indicateurs."""

    # pylint: disable=too-many-instance-attributes

    record: BannerRecord
    key: str
    duplicate_key: str
    variant_class: str
    icon_name: str
    style: str
    has_description: bool
    has_link: bool
    has_message: bool


@dataclass(frozen=True)
class BannerView:
    """Tout ce dont la couche de rendu a besoin pour un affichage."""

    mode: str
    show_sticky_banner: bool
    show_ticker_banner: bool
    current: BannerViewModel
    ticker_items: tuple[BannerViewModel, ...]
    component_style: str
    ticker_track_style: str

    def to_dict(self) -> dict[str, Any]:
        """Représentation JSON-compatible."""
        return asdict(self)


def _variant_key(record: BannerRecord) -> str:
    variant = record.variant or BannerVariant.INFO.value
    return variant if variant in BANNER_CLASSES else BannerVariant.INFO.value


class BannerComponent:
    """Instance de composant: configuration + cycle de vie + rendu."""

    def __init__(
        self,
        provider: BannerProvider,
        dismissal_store: DismissalStore,
        scheduler: TimerScheduler,
        *,
        grouped_config: Mapping[str, Any] | None = None,
        individual_values: Mapping[str, Any] | None = None,
    ) -> None:
        """Initialise le composant (sans fetch: voir `refresh`).

        Args:
            provider: Source des bannières
            dismissal_store: Persistance de session des bannières masquées
            scheduler: Planificateur du timer de rotation
            grouped_config: Configuration groupée (prioritaire)
            individual_values: Valeurs individuelles par nom de champ
        """
        self.provider = provider
        self.grouped_config = dict(grouped_config) if grouped_config else None
        self.individual_values = dict(individual_values or {})
        self.controller = BannerLifecycleController(
            dismissal_store,
            scheduler,
            ThemeTokenComputer.resolve_mode(self.grouped_config, self.individual_values),
        )
        logger.debug("[BannerComponent] Composant créé")

    def configure(
        self,
        *,
        grouped_config: Mapping[str, Any] | None = None,
        individual_values: Mapping[str, Any] | None = None,
    ) -> None:
        """Remplace la configuration; resynchronise si le mode résolu change."""
        self.grouped_config = dict(grouped_config) if grouped_config else None
        self.individual_values = dict(individual_values or {})
        resolved_mode = ThemeTokenComputer.resolve_mode(self.grouped_config, self.individual_values)
        if resolved_mode != self.controller.mode:
            self.controller.set_mode(resolved_mode)

    def refresh(self) -> bool:
        """Exécute un fetch et applique son résultat.

        Returns:
            True si les bannières ont été remplacées
        """
        return self.controller.apply_fetch_result(self.provider.fetch())

    def dismiss(self) -> None:
        """Masque la bannière sticky courante (action utilisateur)."""
        self.controller.dismiss()

    @property
    def tokens(self) -> ResolvedTokenSet:
        """Tokens résolus pour la configuration courante."""
        return ThemeTokenComputer.compute_tokens(self.grouped_config, self.individual_values)

    @property
    def variant_colors(self) -> VariantColors:
        """Couleurs de variantes résolues."""
        return ThemeTokenComputer.compute_variant_colors(self.grouped_config, self.individual_values)

    def _sticky_view_model(self, record: BannerRecord, variant_colors: VariantColors) -> BannerViewModel:
        variant = _variant_key(record)
        return BannerViewModel(
            record=record,
            key=record.id or "",
            duplicate_key="",
            variant_class=BANNER_CLASSES[variant],
            icon_name=ICON_NAMES[variant],
            style=ThemeTokenComputer.banner_style(variant, variant_colors),
            has_description=bool(record.description),
            has_link=bool(record.link_url),
            has_message=record.has_message,
        )

    def _ticker_items(self) -> tuple[BannerViewModel, ...]:
        return tuple(
            BannerViewModel(
                record=record,
                key=f"{record.id}-primary-{index}",
                duplicate_key=f"{record.id}-duplicate-{index}",
                variant_class=TICKER_ITEM_CLASS,
                icon_name=ICON_NAMES[_variant_key(record)],
                style="",
                has_description=bool(record.description),
                has_link=bool(record.link_url),
                has_message=record.has_message,
            )
            for index, record in enumerate(self.controller.active_banners)
        )

    def view(self) -> BannerView:
        """Construit la vue courante."""
        tokens = self.tokens
        variant_colors = self.variant_colors
        ticker_items = self._ticker_items()
        return BannerView(
            mode=self.controller.mode.value,
            show_sticky_banner=self.controller.show_sticky_banner,
            show_ticker_banner=self.controller.show_ticker_banner,
            current=self._sticky_view_model(self.controller.current_banner, variant_colors),
            ticker_items=ticker_items,
            component_style=ThemeTokenComputer.compute_css_variable_string(tokens, variant_colors),
            ticker_track_style=ThemeTokenComputer.ticker_track_style(tokens, len(ticker_items)),
        )

    def teardown(self) -> None:
        """Libère le timer du contrôleur."""
        self.controller.teardown()

    def __enter__(self) -> BannerComponent:
        """Retourne le composant (teardown garanti en sortie)."""
        return self

    def __exit__(self, *exc_info: object) -> None:
        """Appelle `teardown()`."""
        self.teardown()
