"""Configuration pytest: harnais commun des tests Banner Buddy.

Active:
- Loguru sans enqueue (stabilité au shutdown)
- Planificateur de timers factice (aucun timer réel, déclenchement manuel)
- Stockage de session isolé dans un répertoire temporaire

GLib n'est pas importé ici: seuls les tests `tests/ui/` en dépendent.
"""

from __future__ import annotations

import sys
from collections.abc import Callable

import pytest
from loguru import logger

from bannerbuddy.core.io.core_session_storage import MemorySessionStorage, SessionDismissalStore
from bannerbuddy.core.models.core_banner_models import BannerRecord


class FakeScheduler:
    """Planificateur en mémoire: les callbacks ne partent que via `fire()`."""

    def __init__(self) -> None:
        self._next_handle = 0
        self.pending: dict[int, tuple[int, Callable[[], None]]] = {}
        self.cancelled: list[int] = []
        self.scheduled: list[int] = []

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> int:
        self._next_handle += 1
        self.pending[self._next_handle] = (delay_ms, callback)
        self.scheduled.append(delay_ms)
        return self._next_handle

    def cancel(self, handle: int) -> None:
        self.cancelled.append(handle)
        self.pending.pop(handle, None)

    def fire(self, handle: int | None = None) -> None:
        """Déclenche un timer en attente (le plus ancien par défaut)."""
        if handle is None:
            handle = min(self.pending)
        _, callback = self.pending.pop(handle)
        callback()


def pytest_configure(config):
    """Configuration globale de pytest."""
    del config
    # Pas d'enqueue (thread/queue) pour éviter des crashes au shutdown Python/GC.
    logger.remove()
    logger.add(sys.stderr, enqueue=False)


@pytest.fixture(autouse=True)
def isolated_session_dir(tmp_path, monkeypatch):
    """Redirige le stockage de session vers un répertoire temporaire."""
    monkeypatch.setenv("XDG_RUNTIME_DIR", str(tmp_path / "runtime"))
    yield


@pytest.fixture
def fake_scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def session_storage() -> MemorySessionStorage:
    return MemorySessionStorage()


@pytest.fixture
def dismissal_store(session_storage) -> SessionDismissalStore:
    return SessionDismissalStore(session_storage)


@pytest.fixture
def make_banner() -> Callable[..., BannerRecord]:
    """Fabrique de BannerRecord actifs."""

    def _make(banner_id: str, **kwargs) -> BannerRecord:
        values = {
            "name": f"Banner {banner_id}",
            "status": "Active",
            "variant": "Info",
            "title": f"Title {banner_id}",
            "start_date": "2024-01-01",
        }
        values.update(kwargs)
        return BannerRecord(id=banner_id, **values)

    return _make


def pytest_sessionfinish(session, exitstatus):
    """Arrête proprement les handlers Loguru en fin de session."""
    del session, exitstatus
    logger.complete()
    logger.remove()
