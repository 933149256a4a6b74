"""Utilities for CLI entry points.

This module centralizes shared runtime helpers used by `bannerbuddy.main`
(logging policy and minimal argument parsing).
"""

from __future__ import annotations

from .core_config_logging import set_debug_mode, set_production_mode, set_silent_mode


def configure_logging_from_flags(*, debug: bool, verbose: bool = False) -> None:
    """Configure Loguru for the whole process.

    Politique:
    - Sans flag: WARNING uniquement.
    - --verbose: INFO.
    - --debug: DEBUG (+ fichier de log, backtrace/diagnose).
    """
    if debug:
        set_debug_mode()
    elif verbose:
        set_production_mode()
    else:
        set_silent_mode()


def parse_verbosity_flags(argv: list[str]) -> tuple[bool, bool, list[str]]:
    """Parse argv et extrait `--verbose` et `--debug`.

    Returns:
        (debug_enabled, verbose_enabled, remaining_argv)
    """
    debug = False
    verbose = False
    remaining: list[str] = []
    for arg in argv:
        if arg == "--debug":
            debug = True
        elif arg == "--verbose":
            verbose = True
        else:
            remaining.append(arg)
    return debug, verbose, remaining
