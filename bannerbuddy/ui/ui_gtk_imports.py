"""Imports GLib centralisés.

Ce module doit être importé uniquement par la couche `ui`; le cœur métier
ne dépend que du protocole `TimerScheduler`.
"""

# isort: skip_file

from __future__ import annotations

import gi

gi.require_version("GLib", "2.0")

from gi.repository import GLib  # noqa: E402

__all__ = ["GLib"]
