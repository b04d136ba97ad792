"""Stores: implementações concretas de persistência.

Módulos disponíveis:
    - redis_dedupe_store: marcadores de dedupe usando Redis (SET NX EX)
    - redis_job_queue: fila de jobs usando listas Redis (LPUSH)
    - memory_stores: Stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.memory_stores import MemoryDedupeStore, MemoryJobQueue
from app.infra.stores.redis_dedupe_store import RedisDedupeStore
from app.infra.stores.redis_job_queue import RedisJobQueue

__all__ = [
    # Memory (dev/test)
    "MemoryDedupeStore",
    "MemoryJobQueue",
    # Redis
    "RedisDedupeStore",
    "RedisJobQueue",
]
