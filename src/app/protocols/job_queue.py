"""Protocolo da fila de jobs consumida por workers externos."""

from __future__ import annotations

from abc import ABC, abstractmethod


class AsyncJobQueueProtocol(ABC):
    """Contrato mínimo para empilhar jobs serializados em uma fila nomeada."""

    @abstractmethod
    async def push(self, queue_name: str, payload: str) -> None:
        """Empilha um job serializado.

        Args:
            queue_name: Nome da fila (ex.: ig:comment_jobs)
            payload: Job serializado em JSON
        """


class AsyncAtomicEnqueueProtocol(ABC):
    """Contrato para claim de dedupe + push na fila em uma única operação."""

    @abstractmethod
    async def claim_and_push(
        self,
        key: str,
        ttl: int,
        queue_name: str,
        payload: str,
    ) -> bool:
        """Cria o marcador e empilha o job, ou não faz nada.

        Args:
            key: Chave completa do marcador
            ttl: TTL do marcador em segundos
            queue_name: Nome da fila
            payload: Job serializado em JSON

        Returns:
            True se enfileirou; False se o marcador já existia.
        """
