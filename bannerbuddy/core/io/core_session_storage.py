"""Stockage de session et persistance des bannières masquées.

Approche:
- `SessionStorage` imite le sessionStorage d'un navigateur (clé -> chaîne).
- `SessionDismissalStore` persiste l'ensemble des IDs masqués sous forme
  de tableau JSON, en réécrivant toujours l'ensemble complet.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from loguru import logger

from ..config.core_field_defaults import DISMISSED_BANNERS_KEY


class SessionStorage(Protocol):
    """Stockage clé/valeur (chaînes) limité à une session."""

    def get_item(self, key: str) -> str | None:
        """Retourne la valeur associée à la clé, None si absente."""

    def set_item(self, key: str, value: str) -> None:
        """Associe une valeur à la clé."""


class DismissalStore(Protocol):
    """Persistance de l'ensemble des bannières masquées."""

    def load(self) -> set[str]:
        """Charge les IDs masqués (ensemble vide si rien n'est stocké)."""

    def save(self, ids: Iterable[str]) -> None:
        """Remplace les IDs stockés par l'ensemble donné."""


class MemorySessionStorage:
    """sessionStorage en mémoire: vit aussi longtemps que le processus."""

    def __init__(self) -> None:
        """Initialise un stockage vide."""
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        """Retourne la valeur associée à la clé."""
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        """Associe une valeur à la clé."""
        self._items[key] = value


class FileSessionStorage:
    """sessionStorage adossé à un fichier JSON du répertoire de session."""

    def __init__(self, path: str | Path) -> None:
        """Initialise le stockage.

        Args:
            path: Fichier JSON (objet clé -> chaîne)
        """
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as e:
            logger.warning(f"[FileSessionStorage] Erreur JSON: {e}")
            return {}
        except OSError as e:
            logger.warning(f"[FileSessionStorage] ERREUR de lecture: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"[FileSessionStorage] Contenu inattendu dans {self.path}")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def get_item(self, key: str) -> str | None:
        """Retourne la valeur associée à la clé."""
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        """Associe une valeur à la clé (remplacement atomique du fichier)."""
        items = self._read_all()
        items[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_name(self.path.name + ".tmp")
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2)
            os.replace(tmp, self.path)
            logger.debug(f"[FileSessionStorage] Clé '{key}' enregistrée dans {self.path}")
        except OSError as e:
            logger.warning(f"[FileSessionStorage] ERREUR: Impossible d'enregistrer '{key}': {e}")


class SessionDismissalStore:
    """Bannières masquées, persistées dans le stockage de session."""

    def __init__(self, storage: SessionStorage, key: str = DISMISSED_BANNERS_KEY) -> None:
        """Initialise le store.

        Args:
            storage: Stockage de session sous-jacent
            key: Clé de stockage du tableau JSON
        """
        self.storage = storage
        self.key = key

    def load(self) -> set[str]:
        """Charge les IDs masqués."""
        raw = self.storage.get_item(self.key)
        if not raw:
            return set()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"[SessionDismissalStore] Erreur JSON sur '{self.key}': {e}")
            return set()
        if not isinstance(data, list):
            logger.warning(f"[SessionDismissalStore] '{self.key}' n'est pas un tableau")
            return set()
        ids = {str(x) for x in data}
        logger.debug(f"[SessionDismissalStore] {len(ids)} bannière(s) masquée(s) chargée(s)")
        return ids

    def save(self, ids: Iterable[str]) -> None:
        """Réécrit l'ensemble complet des IDs masqués."""
        payload = sorted(set(ids))
        self.storage.set_item(self.key, json.dumps(payload))
        logger.debug(f"[SessionDismissalStore] {len(payload)} bannière(s) masquée(s) enregistrée(s)")
