"""Configuração do pytest para o gateway de webhooks."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from config.settings import (  # noqa: E402
    get_base_settings,
    get_dedupe_settings,
    get_instagram_settings,
)

REQUIRED_ENV = {
    "APP_SECRET": "test-app-secret",
    "IG_VERIFY_TOKEN": "test-verify-token",
    "REDIS_URL": "redis://localhost:6379/0",
}


def _clear_settings_cache() -> None:
    get_base_settings.cache_clear()
    get_dedupe_settings.cache_clear()
    get_instagram_settings.cache_clear()


@pytest.fixture(autouse=True)
def _isolated_settings():
    """Cada teste lê as variáveis de ambiente do zero."""
    _clear_settings_cache()
    yield
    _clear_settings_cache()


@pytest.fixture
def required_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Define as variáveis obrigatórias do serviço."""
    for name, value in REQUIRED_ENV.items():
        monkeypatch.setenv(name, value)
    return dict(REQUIRED_ENV)
