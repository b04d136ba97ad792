"""Settings específicas de Instagram.

Configurações do canal Instagram via webhooks da Graph API (Meta).
Cada canal deve ter seu próprio arquivo de settings para isolamento.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class InstagramSettings:
    """Configurações do canal Instagram.

    Attributes:
        app_secret: Secret do app Meta usado no HMAC de X-Hub-Signature-256
        verify_token: Token para verificação de webhook (hub.verify_token)
        atomic_enqueue: Claim de dedupe + push na fila em um único script Lua
    """

    # Credenciais (carregadas de env)
    app_secret: str = ""
    verify_token: str = ""

    # Enfileiramento
    atomic_enqueue: bool = False

    def validate(self) -> list[str]:
        """Valida configurações mínimas de Instagram.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.app_secret:
            errors.append("APP_SECRET não configurado")

        if not self.verify_token:
            errors.append("IG_VERIFY_TOKEN não configurado")

        return errors


def _load_from_env() -> InstagramSettings:
    """Carrega InstagramSettings a partir de variáveis de ambiente."""
    return InstagramSettings(
        app_secret=os.getenv("APP_SECRET", ""),
        verify_token=os.getenv("IG_VERIFY_TOKEN", ""),
        atomic_enqueue=os.getenv("IG_ATOMIC_ENQUEUE", "").lower() in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_instagram_settings() -> InstagramSettings:
    """Retorna instância cacheada de InstagramSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
