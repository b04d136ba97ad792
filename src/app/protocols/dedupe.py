"""Protocolos de domínio para stores de dedupe.

Interfaces leves (ABCs) dependidas por Application.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AsyncDedupeProtocol(ABC):
    """Contrato mínimo assíncrono para marcadores de dedupe.

    Métodos canônicos:
    - claim(key, ttl) -> bool
      Cria o marcador se ausente (atômico) e retorna True; False se já existia.
    - release(key) -> None
      Remove o marcador (usado quando o enqueue falha após o claim).
    """

    @abstractmethod
    async def claim(self, key: str, ttl: int) -> bool:
        """Marca a chave de forma atômica (set-if-absent com expiração).

        Args:
            key: Chave completa do marcador (ex.: ig:comment_seen:<id>)
            ttl: TTL em segundos

        Returns:
            True se marcada agora (novo); False se já existia (duplicado).
        """

    @abstractmethod
    async def release(self, key: str) -> None:
        """Remove o marcador para permitir nova admissão.

        Args:
            key: Chave completa do marcador
        """
