"""Stores em memória: apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios
e sem coordenação entre instâncias.
"""

from __future__ import annotations

import time
from collections import defaultdict

from app.protocols.dedupe import AsyncDedupeProtocol
from app.protocols.job_queue import AsyncJobQueueProtocol


class MemoryDedupeStore(AsyncDedupeProtocol):
    """Store de dedupe em memória: apenas para dev/test."""

    def __init__(self) -> None:
        self._store: dict[str, float] = {}  # key -> expires_at

    def _cleanup_expired(self) -> None:
        """Remove entradas expiradas."""
        now = time.time()
        expired = [k for k, v in self._store.items() if v <= now]
        for k in expired:
            del self._store[k]

    async def claim(self, key: str, ttl: int) -> bool:
        """Marca a chave se ausente (sem await entre check e set)."""
        self._cleanup_expired()
        if key in self._store:
            return False  # Duplicado
        self._store[key] = time.time() + ttl
        return True  # Novo

    async def release(self, key: str) -> None:
        """Remove o marcador."""
        self._store.pop(key, None)

    def contains(self, key: str) -> bool:
        """Indica se o marcador está ativo (apenas para testes)."""
        self._cleanup_expired()
        return key in self._store


class MemoryJobQueue(AsyncJobQueueProtocol):
    """Fila de jobs em memória: apenas para dev/test.

    Segue a semântica de LPUSH: o job mais recente fica no índice 0.
    """

    def __init__(self) -> None:
        self._queues: defaultdict[str, list[str]] = defaultdict(list)

    async def push(self, queue_name: str, payload: str) -> None:
        """Empilha job no início da lista."""
        self._queues[queue_name].insert(0, payload)

    def get_jobs(self, queue_name: str) -> list[str]:
        """Retorna os jobs da fila (apenas para testes)."""
        return list(self._queues.get(queue_name, []))
