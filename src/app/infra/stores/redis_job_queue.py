"""Redis Job Queue: fila de jobs de comentário (lista Redis).

Jobs são empilhados com LPUSH; o worker consumidor (fora deste serviço)
retira do outro lado da lista.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.infra.stores.redis_dedupe_store import MARKER_VALUE
from app.protocols.job_queue import AsyncAtomicEnqueueProtocol, AsyncJobQueueProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

# KEYS[1]=marcador, KEYS[2]=fila; ARGV[1]=sentinela, ARGV[2]=ttl, ARGV[3]=job
CLAIM_AND_PUSH_SCRIPT = """
if redis.call('SET', KEYS[1], ARGV[1], 'NX', 'EX', ARGV[2]) then
    redis.call('LPUSH', KEYS[2], ARGV[3])
    return 1
end
return 0
"""


class RedisJobQueue(AsyncJobQueueProtocol, AsyncAtomicEnqueueProtocol):
    """Fila de jobs usando listas Redis.

    Também oferece claim + push em um único script Lua, fechando a
    janela em que o marcador existe sem o job correspondente.
    Em Redis Cluster, marcador e fila precisam cair no mesmo slot
    (ex.: hash tags) para usar o modo atômico.

    Args:
        redis_client: Cliente Redis assíncrono
    """

    def __init__(self, redis_client: AsyncRedis) -> None:
        self._redis = redis_client
        self._claim_and_push = redis_client.register_script(CLAIM_AND_PUSH_SCRIPT)

    async def push(self, queue_name: str, payload: str) -> None:
        """Empilha job serializado (LPUSH)."""
        try:
            depth = await self._redis.lpush(queue_name, payload)
        except Exception as exc:
            raise RedisConnectionError(
                "Falha ao enfileirar job no Redis", operation="push"
            ) from exc
        logger.debug("job_pushed", extra={"queue": queue_name, "queue_depth": depth})

    async def claim_and_push(
        self,
        key: str,
        ttl: int,
        queue_name: str,
        payload: str,
    ) -> bool:
        """Claim do marcador e push do job atomicamente no servidor.

        Returns:
            True se o job foi enfileirado; False se o marcador já existia.
        """
        try:
            result = await self._claim_and_push(
                keys=[key, queue_name],
                args=[MARKER_VALUE, ttl, payload],
            )
        except Exception as exc:
            raise RedisConnectionError(
                "Falha ao executar claim atômico no Redis", operation="claim_and_push"
            ) from exc
        return int(result) == 1
