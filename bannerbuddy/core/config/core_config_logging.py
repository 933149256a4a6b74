"""Logging Loguru de Banner Buddy.

Chaque exécution de la CLI est une session: en debug, elle écrit son propre
fichier horodaté dans `LOG_DIR`, et seules les dernières sessions sont gardées.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Final

from loguru import logger

from .core_paths import LOG_DIR

DEBUG: Final[str] = "DEBUG"
INFO: Final[str] = "INFO"
WARNING: Final[str] = "WARNING"

# Un fichier par session CLI
SESSION_LOG_PATTERN: Final[str] = "bannerbuddy_session_{time:YYYY-MM-DD_HH-mm-ss}.log"
SESSION_LOG_RETENTION: Final[int] = 10

_CONSOLE_FORMAT: Final[str] = "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <level>{message}</level>"
_DEBUG_CONSOLE_FORMAT: Final[str] = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
_FILE_FORMAT: Final[str] = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"


def configure_logging(
    level: str = INFO,
    *,
    enable_file_logging: bool = True,
    log_dir: Path | None = None,
) -> None:
    """Installe les handlers Loguru.

    Args:
        level: DEBUG, INFO ou WARNING
        enable_file_logging: Ajoute le fichier de session
        log_dir: Répertoire des fichiers de session (`LOG_DIR` par défaut)
    """
    logger.remove()

    logger.add(
        sys.stderr,
        format=_DEBUG_CONSOLE_FORMAT if level == DEBUG else _CONSOLE_FORMAT,
        level=level,
        colorize=True,
        backtrace=True,
        diagnose=(level == DEBUG),
    )

    if enable_file_logging:
        target_dir = log_dir or LOG_DIR
        target_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            target_dir / SESSION_LOG_PATTERN,
            format=_FILE_FORMAT,
            level=level,
            retention=SESSION_LOG_RETENTION,
            compression="zip",
            encoding="utf-8",
        )

    logger.info(f"[Logging] niveau={level}, fichier de session={enable_file_logging}")


def set_production_mode() -> None:
    """`--verbose`: INFO sur stderr, sans fichier."""
    configure_logging(level=INFO, enable_file_logging=False)


def set_debug_mode() -> None:
    """`--debug`: DEBUG détaillé + fichier de session."""
    configure_logging(level=DEBUG, enable_file_logging=True)
    logger.debug(f"[Logging] Fichier de session dans {LOG_DIR}")


def set_silent_mode() -> None:
    """Sans flag: WARNING uniquement."""
    configure_logging(level=WARNING, enable_file_logging=False)
