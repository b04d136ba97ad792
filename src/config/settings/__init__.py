"""Agregador de settings do gateway de webhooks.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    DedupeSettings,
    Environment,
    get_base_settings,
    get_dedupe_settings,
)

# Channel-specific settings
from config.settings.instagram import (
    InstagramSettings,
    get_instagram_settings,
)

__all__ = [
    # Base
    "BaseSettings",
    "DedupeSettings",
    "Environment",
    # Channels
    "InstagramSettings",
    "get_base_settings",
    "get_dedupe_settings",
    "get_instagram_settings",
]
