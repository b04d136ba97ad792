"""Settings base: núcleo do serviço (core) e dedupe/fila (dedupe)."""

from __future__ import annotations

from config.settings.base.core import BaseSettings, Environment, get_base_settings
from config.settings.base.dedupe import DedupeSettings, get_dedupe_settings

__all__ = [
    "BaseSettings",
    "DedupeSettings",
    "Environment",
    "get_base_settings",
    "get_dedupe_settings",
]
