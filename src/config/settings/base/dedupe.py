"""Settings de dedupe/idempotência.

Configurações para garantir enfileiramento único de comentários.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# 7 dias: janela em que a Meta ainda pode reentregar o mesmo evento
DEFAULT_DEDUPE_TTL_SECONDS = 604800
DEFAULT_DEDUPE_KEY_PREFIX = "ig:comment_seen:"
DEFAULT_COMMENT_QUEUE = "ig:comment_jobs"


@dataclass(frozen=True)
class DedupeSettings:
    """Configurações de dedupe/idempotência.

    Attributes:
        ttl_seconds: TTL do marcador de dedupe
        key_prefix: Prefixo das chaves de marcador (prefixo + comment_id)
        queue_name: Nome da lista Redis com os jobs de comentário
    """

    ttl_seconds: int = DEFAULT_DEDUPE_TTL_SECONDS
    key_prefix: str = DEFAULT_DEDUPE_KEY_PREFIX
    queue_name: str = DEFAULT_COMMENT_QUEUE

    def validate(self) -> list[str]:
        """Valida configurações de dedupe.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.ttl_seconds <= 0:
            errors.append("IG_DEDUPE_TTL_SECONDS deve ser > 0")

        if not self.key_prefix:
            errors.append("IG_DEDUPE_KEY_PREFIX não pode ser vazio")

        if not self.queue_name:
            errors.append("IG_COMMENT_QUEUE não pode ser vazio")

        return errors


def _load_dedupe_from_env() -> DedupeSettings:
    """Carrega DedupeSettings de variáveis de ambiente."""
    return DedupeSettings(
        ttl_seconds=int(
            os.getenv("IG_DEDUPE_TTL_SECONDS", str(DEFAULT_DEDUPE_TTL_SECONDS))
        ),
        key_prefix=os.getenv("IG_DEDUPE_KEY_PREFIX", DEFAULT_DEDUPE_KEY_PREFIX),
        queue_name=os.getenv("IG_COMMENT_QUEUE", DEFAULT_COMMENT_QUEUE),
    )


@lru_cache(maxsize=1)
def get_dedupe_settings() -> DedupeSettings:
    """Retorna instância cacheada de DedupeSettings."""
    return _load_dedupe_from_env()
