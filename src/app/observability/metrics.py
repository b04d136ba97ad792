"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente pelo backend de logs (contagens e histogramas por campo).

Métricas suportadas:
- Latência: tempo de execução por componente/operação
- Admissão de comentário: counter de enfileirados vs duplicados
- Resultado de webhook: counter por status HTTP e motivo

Uso:
    from app.observability.metrics import record_latency, record_webhook_outcome

    start = time.perf_counter()
    # ... operação ...
    record_latency("comment_gate", "enqueue", (time.perf_counter() - start) * 1000)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "comment_gate")
        operation: Nome da operação (ex: "enqueue_comment_events")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação (default: o do contexto atual)
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_comment_admission(admitted: bool, correlation_id: str | None = None) -> None:
    """Registra admissão (enfileirado) ou descarte (duplicado) de comentário."""
    logger.info(
        "metric_comment_admission",
        extra={
            "metric_type": "counter",
            "component": "comment_gate",
            "result": "enqueued" if admitted else "duplicate",
            "correlation_id": correlation_id,
        },
    )


def record_webhook_outcome(
    status_code: int,
    reason: str,
    correlation_id: str | None = None,
) -> None:
    """Registra o resultado de uma requisição de webhook.

    Args:
        status_code: Status HTTP respondido
        reason: Motivo curto (ex: "received", "invalid_signature")
        correlation_id: ID de correlação (default: o do contexto atual)
    """
    logger.info(
        "metric_webhook_outcome",
        extra={
            "metric_type": "counter",
            "component": "instagram_webhook",
            "status_code": status_code,
            "reason": reason,
            "correlation_id": correlation_id,
        },
    )
