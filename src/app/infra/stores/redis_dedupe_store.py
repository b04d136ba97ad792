"""Redis Dedupe Store: marcadores de comentário já enfileirado.

Usa SET NX EX (set if not exists com expiração) para o claim atômico:
duas entregas concorrentes do mesmo comment_id nunca passam ambas.

Contrato de Keys:
    As keys chegam completas (prefixo + comment_id) do caso de uso.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.protocols.dedupe import AsyncDedupeProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

# Valor sentinela do marcador
MARKER_VALUE = "1"


class RedisDedupeStore(AsyncDedupeProtocol):
    """Store de dedupe usando Redis.

    Args:
        redis_client: Cliente Redis assíncrono
    """

    def __init__(self, redis_client: AsyncRedis) -> None:
        self._redis = redis_client

    async def claim(self, key: str, ttl: int) -> bool:
        """Cria o marcador se ausente.

        - Se chave não existe: cria com TTL e retorna True (novo)
        - Se chave existe: retorna False (duplicado)
        """
        try:
            was_set = await self._redis.set(key, MARKER_VALUE, nx=True, ex=ttl)
        except Exception as exc:
            raise RedisConnectionError(
                "Falha ao registrar dedupe no Redis", operation="claim"
            ) from exc

        if not was_set:
            logger.debug("dedupe_duplicate_detected", extra={"key": key})
        return bool(was_set)

    async def release(self, key: str) -> None:
        """Remove o marcador (rollback de claim)."""
        try:
            await self._redis.delete(key)
        except Exception as exc:
            raise RedisConnectionError(
                "Falha ao remover dedupe no Redis", operation="release"
            ) from exc
        logger.debug("dedupe_released", extra={"key": key})
