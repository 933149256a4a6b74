"""Cycle de vie des bannières: visibilité, masquage et rotation automatique.

Machine à états sur `{mode, banners, dismissed, timer}`:
- chargement des données -> synchronisation du mode;
- mode sticky: une bannière à la fois, masquable, rotation après 15 s;
- mode ticker: toutes les bannières actives, l'état de masquage est ignoré.

Au plus un timer est en attente: tout réarmement annule d'abord le précédent,
et `teardown()` annule le timer restant. Après `teardown()`, plus aucune
mutation n'est appliquée.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from types import TracebackType
from typing import Any, Protocol

from loguru import logger

from ..config.core_field_defaults import AUTO_DISMISS_DELAY_MS
from ..io.core_banner_provider import FetchResult
from ..io.core_session_storage import DismissalStore
from ..models.core_banner_models import EMPTY_BANNER, BannerRecord, DisplayMode
from ..theme.core_theme_resolution import normalize_mode


class TimerScheduler(Protocol):
    """Planificateur de callbacks différés à usage unique."""

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> int:
        """Planifie `callback` après `delay_ms` et retourne un identifiant."""

    def cancel(self, handle: int) -> None:
        """Annule un callback planifié (sans effet s'il a déjà été exécuté)."""


@dataclass
class BannerLifecycleState:
    """État mutable d'une instance de composant."""

    mode: DisplayMode = DisplayMode.STICKY
    banners: tuple[BannerRecord, ...] = ()
    dismissed: set[str] = field(default_factory=set)
    timer_handle: int | None = None
    torn_down: bool = False


class BannerLifecycleController:
    """Gère les bannières visibles, masquées et la rotation automatique."""

    def __init__(
        self,
        dismissal_store: DismissalStore,
        scheduler: TimerScheduler,
        mode: Any = DisplayMode.STICKY,
        *,
        auto_dismiss_delay_ms: int = AUTO_DISMISS_DELAY_MS,
    ) -> None:
        """Initialise le contrôleur.

        Args:
            dismissal_store: Persistance des bannières masquées (session)
            scheduler: Planificateur du timer de rotation
            mode: Mode d'affichage initial (normalisé)
            auto_dismiss_delay_ms: Délai avant rotation automatique
        """
        self.dismissal_store = dismissal_store
        self.scheduler = scheduler
        self.auto_dismiss_delay_ms = auto_dismiss_delay_ms
        self.state = BannerLifecycleState(mode=normalize_mode(mode))
        self._timer_generation = 0
        self._listeners: list[Callable[[BannerLifecycleController], None]] = []
        logger.debug(f"[BannerLifecycleController] Initialisé (mode={self.state.mode.value})")

    # ------------------------------------------------------------------
    # Lecture de l'état
    # ------------------------------------------------------------------

    @property
    def mode(self) -> DisplayMode:
        """Mode d'affichage courant."""
        return self.state.mode

    @property
    def is_sticky_mode(self) -> bool:
        """True en mode sticky."""
        return self.state.mode == DisplayMode.STICKY

    @property
    def is_ticker_mode(self) -> bool:
        """True en mode ticker."""
        return self.state.mode == DisplayMode.TICKER

    @property
    def banners(self) -> tuple[BannerRecord, ...]:
        """Enregistrements chargés, dans l'ordre reçu."""
        return self.state.banners

    @property
    def dismissed(self) -> frozenset[str]:
        """Copie des IDs masqués en mémoire."""
        return frozenset(self.state.dismissed)

    @property
    def has_pending_timer(self) -> bool:
        """True si un timer de rotation est en attente."""
        return self.state.timer_handle is not None

    @property
    def is_torn_down(self) -> bool:
        """True après `teardown()`."""
        return self.state.torn_down

    @property
    def active_banners(self) -> list[BannerRecord]:
        """Bannières actives (hors masquées en mode sticky)."""
        active = [banner for banner in self.state.banners if banner.is_active]
        if self.is_ticker_mode:
            return active
        return [banner for banner in active if banner.id not in self.state.dismissed]

    @property
    def current_banner(self) -> BannerRecord:
        """Première bannière active, ou le placeholder vide."""
        active = self.active_banners
        return active[0] if active else EMPTY_BANNER

    @property
    def show_banner(self) -> bool:
        """True si au moins une bannière est affichable."""
        return bool(self.active_banners)

    @property
    def show_sticky_banner(self) -> bool:
        """True si une bannière sticky doit être affichée."""
        return self.is_sticky_mode and self.show_banner

    @property
    def show_ticker_banner(self) -> bool:
        """True si le ticker doit être affiché."""
        return self.is_ticker_mode and self.show_banner

    def add_listener(self, callback: Callable[[BannerLifecycleController], None]) -> None:
        """Enregistre un callback appelé après chaque changement d'état."""
        self._listeners.append(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback(self)

    def _guard(self, action: str) -> bool:
        if self.state.torn_down:
            logger.debug(f"[BannerLifecycleController] {action} ignoré après teardown")
            return False
        return True

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def set_mode(self, value: Any) -> None:
        """Change de mode puis resynchronise l'état."""
        if not self._guard("set_mode"):
            return
        new_mode = normalize_mode(value)
        logger.debug(f"[BannerLifecycleController] Mode: {self.state.mode.value} → {new_mode.value}")
        self.state.mode = new_mode
        self.sync_mode_state()
        self._notify()

    def load(self, records: Iterable[BannerRecord]) -> None:
        """Remplace les bannières (atomiquement) puis resynchronise le mode."""
        if not self._guard("load"):
            return
        self.state.banners = tuple(records)
        logger.info(f"[BannerLifecycleController] {len(self.state.banners)} bannière(s) chargée(s)")
        self.sync_mode_state()
        self._notify()

    def apply_fetch_result(self, result: FetchResult) -> bool:
        """Applique un résultat de fetch.

        Returns:
            True si les bannières ont été remplacées, False si l'état est conservé
        """
        if result.ok:
            self.load(result.records or ())
            return True
        if result.errors:
            logger.error(f"[BannerLifecycleController] Erreur de récupération des bannières: {list(result.errors)}")
        return False

    def sync_mode_state(self) -> None:
        """Ticker: coupe le timer. Sticky: recharge les masquées et réarme."""
        if not self._guard("sync_mode_state"):
            return
        if self.is_ticker_mode:
            self.clear_auto_dismiss_timer()
            return

        self.state.dismissed = set(self.dismissal_store.load())
        self.setup_auto_dismiss()

    def clear_auto_dismiss_timer(self) -> None:
        """Annule le timer en attente, s'il existe."""
        self._timer_generation += 1
        handle = self.state.timer_handle
        if handle is not None:
            self.scheduler.cancel(handle)
            self.state.timer_handle = None
            logger.debug(f"[BannerLifecycleController] Timer {handle} annulé")

    def setup_auto_dismiss(self) -> None:
        """Réarme le timer de rotation si une bannière sticky est visible."""
        self.clear_auto_dismiss_timer()
        if self.state.torn_down or not self.is_sticky_mode or not self.show_banner:
            return

        generation = self._timer_generation
        self.state.timer_handle = self.scheduler.schedule(
            self.auto_dismiss_delay_ms,
            lambda: self._on_timer_fired(generation),
        )
        logger.debug(
            f"[BannerLifecycleController] Timer {self.state.timer_handle} armé ({self.auto_dismiss_delay_ms} ms)"
        )

    def _on_timer_fired(self, generation: int) -> None:
        if self.state.torn_down or generation != self._timer_generation:
            logger.debug("[BannerLifecycleController] Timer périmé ignoré")
            return
        # Le timer vient de s'exécuter: plus rien à annuler
        self.state.timer_handle = None
        self.handle_auto_dismiss()

    def handle_auto_dismiss(self) -> None:
        """Masque la bannière courante en mémoire uniquement, puis réarme."""
        if not self._guard("handle_auto_dismiss") or not self.is_sticky_mode:
            return

        self.clear_auto_dismiss_timer()

        current = self.current_banner
        if current.id:
            self.state.dismissed.add(current.id)
            logger.debug(f"[BannerLifecycleController] Rotation automatique: {current.id} masquée")
            self.setup_auto_dismiss()
            self._notify()

    def dismiss(self) -> None:
        """Masquage explicite: persiste l'ensemble complet puis réarme."""
        if not self._guard("dismiss") or not self.is_sticky_mode:
            return

        self.clear_auto_dismiss_timer()

        current = self.current_banner
        if current.id:
            self.state.dismissed.add(current.id)
            self.dismissal_store.save(self.state.dismissed)
            logger.info(f"[BannerLifecycleController] Bannière {current.id} masquée")
            self.setup_auto_dismiss()
            self._notify()

    def teardown(self) -> None:
        """Annule tout timer en attente et fige l'état."""
        self.clear_auto_dismiss_timer()
        if not self.state.torn_down:
            self.state.torn_down = True
            logger.debug("[BannerLifecycleController] Teardown effectué")

    def __enter__(self) -> BannerLifecycleController:
        """Retourne le contrôleur (teardown garanti en sortie)."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Appelle `teardown()`."""
        self.teardown()
