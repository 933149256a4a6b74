"""Point d'entrée en ligne de commande.

Usage:
    bannerbuddy [--debug|--verbose] BANNERS_JSON [--config CONFIG_JSON] [--watch]

Affiche la vue calculée (JSON) pour une réponse de bannières enregistrée.
Avec `--watch`, fait tourner la boucle GLib et affiche chaque rotation
jusqu'à ce qu'il ne reste plus rien à afficher.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from loguru import logger

from bannerbuddy.core.config.core_config_runtime import configure_logging_from_flags, parse_verbosity_flags
from bannerbuddy.core.config.core_paths import get_session_storage_path
from bannerbuddy.core.core_exceptions import BannerBuddyError, BannerConfigError
from bannerbuddy.core.io.core_banner_provider import JsonFileBannerProvider
from bannerbuddy.core.io.core_session_storage import FileSessionStorage, SessionDismissalStore
from bannerbuddy.core.managers.core_banner_lifecycle import BannerLifecycleController, TimerScheduler
from bannerbuddy.core.services.core_banner_component import BannerComponent

USAGE = "usage: bannerbuddy [--debug|--verbose] BANNERS_JSON [--config CONFIG_JSON] [--watch]"


@dataclass
class CliOptions:
    """Options de la ligne de commande."""

    banners_path: Path
    config_path: Path | None = None
    watch: bool = False


def parse_cli_args(argv: list[str]) -> CliOptions:
    """Parse les arguments restants (après les flags de verbosité).

    Raises:
        BannerConfigError: si les arguments sont incomplets ou inconnus
    """
    banners_path: Path | None = None
    config_path: Path | None = None
    watch = False

    args = iter(argv)
    for arg in args:
        if arg == "--watch":
            watch = True
        elif arg == "--config":
            value = next(args, None)
            if value is None:
                raise BannerConfigError("--config attend un chemin")
            config_path = Path(value)
        elif arg.startswith("-"):
            raise BannerConfigError(f"Option inconnue: {arg}")
        elif banners_path is None:
            banners_path = Path(arg)
        else:
            raise BannerConfigError(f"Argument en trop: {arg}")

    if banners_path is None:
        raise BannerConfigError("Fichier de bannières manquant")
    return CliOptions(banners_path=banners_path, config_path=config_path, watch=watch)


def load_config_file(path: Path | None) -> tuple[dict[str, Any] | None, dict[str, Any]]:
    """Lit `{"bannerConfig": {...}, "properties": {...}}`.

    Returns:
        (configuration groupée ou None, valeurs individuelles)

    Raises:
        BannerConfigError: fichier illisible ou mal structuré
    """
    if path is None:
        return None, {}

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise BannerConfigError(f"Configuration illisible ({path}): {e}") from e

    if not isinstance(data, dict):
        raise BannerConfigError(f"Configuration invalide: {path}")

    grouped = data.get("bannerConfig")
    individual = data.get("properties") or {}
    if grouped is not None and not isinstance(grouped, dict):
        raise BannerConfigError("`bannerConfig` doit être un objet")
    if not isinstance(individual, dict):
        raise BannerConfigError("`properties` doit être un objet")
    return grouped, individual


def _build_scheduler() -> TimerScheduler:
    # Import tardif: GLib n'est requis que pour exécuter la boucle d'événements.
    from bannerbuddy.ui.ui_glib_scheduler import GLibTimerScheduler  # pylint: disable=import-outside-toplevel

    return GLibTimerScheduler()


def _print_view(component: BannerComponent) -> None:
    print(json.dumps(component.view().to_dict(), indent=2, ensure_ascii=False))


def _run_watch(component: BannerComponent) -> None:
    if not component.controller.show_sticky_banner:
        logger.info("[main] Rien à faire tourner (ticker ou aucune bannière)")
        return

    from bannerbuddy.ui.ui_gtk_imports import GLib  # pylint: disable=import-outside-toplevel

    loop = GLib.MainLoop()

    def _on_change(controller: BannerLifecycleController) -> None:
        current = controller.current_banner
        if current.is_empty:
            logger.info("[main] Toutes les bannières ont tourné")
            loop.quit()
            return
        print(f"[{current.variant or 'Info'}] {current.title or current.name or current.id}", flush=True)

    component.controller.add_listener(_on_change)
    _on_change(component.controller)
    logger.debug("[main] Démarrage de la boucle GLib")
    loop.run()


def _run_main(argv: list[str]) -> int:
    """Exécute la commande et retourne un code de sortie."""
    debug, verbose, remaining_argv = parse_verbosity_flags(argv)
    configure_logging_from_flags(debug=debug, verbose=verbose)

    try:
        options = parse_cli_args(remaining_argv)
    except BannerConfigError as e:
        print(f"{e}\n{USAGE}", file=sys.stderr)
        return 2

    grouped, individual = load_config_file(options.config_path)
    dismissal_store = SessionDismissalStore(FileSessionStorage(get_session_storage_path()))

    with BannerComponent(
        JsonFileBannerProvider(options.banners_path),
        dismissal_store,
        _build_scheduler(),
        grouped_config=grouped,
        individual_values=individual,
    ) as component:
        if not component.refresh():
            logger.error(f"[main] Impossible de charger {options.banners_path}")
            return 1
        if options.watch:
            _run_watch(component)
        else:
            _print_view(component)
    return 0


def main() -> None:
    """Point d'entrée Python (console script)."""
    try:
        exit_code = _run_main(sys.argv[1:])
    except BannerBuddyError as exc:
        logger.error(f"[main] {exc}")
        raise SystemExit(1) from exc
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
