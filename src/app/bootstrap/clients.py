"""Factories de clientes externos: Redis.

O cliente é criado e fechado pelo lifespan da aplicação (app/app.py) e
injetado explicitamente; não há singleton de módulo.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

    from config.settings import BaseSettings

logger = logging.getLogger(__name__)


def create_async_redis_client(settings: BaseSettings) -> AsyncRedis:
    """Cria cliente Redis assíncrono a partir das settings base.

    Os timeouts de socket limitam claim/push: um Redis lento vira erro
    (HTTP 500) e a Meta reentrega o webhook.

    Raises:
        ValueError: Se REDIS_URL não configurado
    """
    from redis.asyncio import Redis as AsyncRedis

    if not settings.redis_url:
        msg = "REDIS_URL não configurado"
        raise ValueError(msg)

    client: AsyncRedis = AsyncRedis.from_url(
        settings.redis_url,
        decode_responses=True,
        socket_timeout=settings.redis_timeout_seconds,
        socket_connect_timeout=settings.redis_timeout_seconds,
    )

    host = client.connection_pool.connection_kwargs.get("host", "unknown")
    logger.info("async_redis_client_created", extra={"host": host})
    return client


async def connect_redis(client: AsyncRedis) -> None:
    """Valida a conexão no startup (PING); falha impede o boot.

    Raises:
        RedisConnectionError: Se o Redis não responder
    """
    try:
        await client.ping()
    except Exception as exc:
        raise RedisConnectionError("Falha ao conectar no Redis", operation="ping") from exc
    logger.info("redis_connected")


async def close_redis(client: AsyncRedis | None) -> None:
    """Fecha o cliente Redis (shutdown gracioso)."""
    if client is None:
        return
    close_async = getattr(client, "aclose", None)
    if callable(close_async):
        await close_async()
    else:
        await client.close()
    logger.info("redis_client_closed")
