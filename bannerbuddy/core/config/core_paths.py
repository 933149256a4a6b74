"""Chemins utilisés par Banner Buddy.

Module séparé pour éviter les dépendances circulaires et clarifier les responsabilités.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Final

LOG_DIR: Final[Path] = Path.home() / ".config" / "bannerbuddy" / "logs"

SESSION_STORAGE_FILENAME: Final[str] = "session_storage.json"


def get_session_dir() -> Path:
    """Retourne le répertoire du stockage de session.

    `$XDG_RUNTIME_DIR` est vidé à la fermeture de session utilisateur, ce qui
    donne la durée de vie d'un sessionStorage de navigateur. Sans lui, on se
    rabat sur le répertoire temporaire du système.

    Returns:
        Path vers le répertoire de session
    """
    runtime_dir = os.environ.get("XDG_RUNTIME_DIR")
    base = Path(runtime_dir) if runtime_dir else Path(tempfile.gettempdir())
    return base / "bannerbuddy"


def get_session_storage_path() -> Path:
    """Retourne le chemin du fichier de stockage de session."""
    return get_session_dir() / SESSION_STORAGE_FILENAME
