"""Planificateur de timers adossé à la boucle principale GLib."""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

from .ui_gtk_imports import GLib


class GLibTimerScheduler:
    """Callbacks différés à usage unique via `GLib.timeout_add`."""

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> int:
        """Planifie `callback` après `delay_ms` millisecondes.

        Returns:
            Identifiant de source GLib
        """

        def _fire() -> bool:
            callback()
            return GLib.SOURCE_REMOVE

        source_id = GLib.timeout_add(delay_ms, _fire)
        logger.debug(f"[GLibTimerScheduler] Source {source_id} planifiée ({delay_ms} ms)")
        return source_id

    def cancel(self, handle: int) -> None:
        """Retire la source GLib si elle est encore attachée."""
        if handle > 0:
            GLib.source_remove(handle)
            logger.debug(f"[GLibTimerScheduler] Source {handle} retirée")
