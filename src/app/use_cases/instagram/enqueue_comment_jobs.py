"""Use case: admissão (dedupe) e enfileiramento de eventos de comentário.

Fluxo por evento:
1. Claim atômico do marcador ig:comment_seen:<comment_id> (TTL 7 dias)
2. Se já existia: duplicado, nada mais acontece
3. Se novo: job serializado é empilhado em ig:comment_jobs

O par claim → push não é transacional no modo padrão. Falha no push
libera o marcador para que o retry da Meta seja admitido; um crash do
processo entre as duas etapas ainda perde o evento. O modo atômico
(script Lua no Redis) fecha essa janela.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from api.normalizers.instagram import extract_comment_events
from app.observability.metrics import record_comment_admission, record_latency
from config.settings.base.dedupe import (
    DEFAULT_COMMENT_QUEUE,
    DEFAULT_DEDUPE_KEY_PREFIX,
    DEFAULT_DEDUPE_TTL_SECONDS,
)

if TYPE_CHECKING:
    from api.normalizers.instagram import CommentEvent, NotificationEnvelope
    from api.normalizers.instagram.extractor import Clock
    from app.protocols import (
        AsyncAtomicEnqueueProtocol,
        AsyncDedupeProtocol,
        AsyncJobQueueProtocol,
    )

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EnqueueSummary:
    """Resultado do processamento de um webhook (uso interno/logs)."""

    extracted: int
    enqueued: int
    duplicates: int


class CommentJobGate:
    """Portão de dedupe + enqueue para CommentEvent.

    Args:
        dedupe: Store de marcadores (claim/release)
        queue: Fila de jobs
        atomic: Store com claim + push atômico; quando presente, substitui
            o fluxo em duas etapas
        ttl_seconds: TTL do marcador
        queue_name: Nome da fila de jobs
        key_prefix: Prefixo do marcador
    """

    def __init__(
        self,
        dedupe: AsyncDedupeProtocol,
        queue: AsyncJobQueueProtocol,
        *,
        atomic: AsyncAtomicEnqueueProtocol | None = None,
        ttl_seconds: int = DEFAULT_DEDUPE_TTL_SECONDS,
        queue_name: str = DEFAULT_COMMENT_QUEUE,
        key_prefix: str = DEFAULT_DEDUPE_KEY_PREFIX,
    ) -> None:
        self._dedupe = dedupe
        self._queue = queue
        self._atomic = atomic
        self._ttl_seconds = ttl_seconds
        self._queue_name = queue_name
        self._key_prefix = key_prefix

    @property
    def queue_name(self) -> str:
        return self._queue_name

    def dedupe_key(self, comment_id: str) -> str:
        """Chave determinística do marcador para o comentário."""
        return f"{self._key_prefix}{comment_id}"

    async def admit_and_enqueue(self, event: CommentEvent) -> bool:
        """Admite e enfileira o evento se o comentário ainda não foi visto.

        Returns:
            True se enfileirou; False se duplicado (resultado esperado em
            reentregas, não é erro).

        Raises:
            RedisConnectionError: Falha no store (propaga para o endpoint)
        """
        key = self.dedupe_key(event.comment_id)
        payload = event.to_json()

        if self._atomic is not None:
            enqueued = await self._atomic.claim_and_push(
                key, self._ttl_seconds, self._queue_name, payload
            )
        else:
            enqueued = await self._claim_then_push(key, payload, event)

        if not enqueued:
            logger.debug(
                "ig_comment_duplicate",
                extra={"comment_id": event.comment_id},
            )
            record_comment_admission(admitted=False)
            return False

        logger.info(
            "ig_comment_detected",
            extra={
                "comment_id": event.comment_id,
                "media_id": event.media_id,
                "event_time": event.event_time,
            },
        )
        record_comment_admission(admitted=True)
        return True

    async def _claim_then_push(self, key: str, payload: str, event: CommentEvent) -> bool:
        if not await self._dedupe.claim(key, self._ttl_seconds):
            return False

        try:
            await self._queue.push(self._queue_name, payload)
        except Exception:
            await self._release_after_push_failure(key, event)
            raise
        return True

    async def _release_after_push_failure(self, key: str, event: CommentEvent) -> None:
        try:
            await self._dedupe.release(key)
        except Exception:
            # Marcador fica órfão até o TTL; o evento não será reenfileirado
            logger.exception(
                "ig_comment_claim_release_failed",
                extra={"comment_id": event.comment_id},
            )
            return
        logger.warning(
            "ig_comment_claim_released",
            extra={"comment_id": event.comment_id, "reason": "push_failed"},
        )


async def enqueue_comment_events(
    envelope: NotificationEnvelope,
    gate: CommentJobGate,
    *,
    clock: Clock | None = None,
) -> EnqueueSummary:
    """Extrai eventos do envelope e passa cada um pelo gate, em ordem.

    Args:
        envelope: Envelope parseado do webhook
        gate: Gate de dedupe/enqueue
        clock: Fonte de unix seconds para entries sem time

    Returns:
        EnqueueSummary com contagens (nunca refletidas na resposta HTTP)
    """
    started_at = time.perf_counter()
    events = extract_comment_events(envelope, clock=clock)

    enqueued = 0
    for event in events:
        if await gate.admit_and_enqueue(event):
            enqueued += 1

    summary = EnqueueSummary(
        extracted=len(events),
        enqueued=enqueued,
        duplicates=len(events) - enqueued,
    )
    record_latency(
        "comment_gate",
        "enqueue_comment_events",
        (time.perf_counter() - started_at) * 1000,
    )
    return summary
