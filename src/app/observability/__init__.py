"""Observabilidade: logs estruturados, correlation_id e métricas.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_latency, record_webhook_outcome
"""

from app.observability.correlation import (
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_comment_admission,
    record_latency,
    record_webhook_outcome,
)

__all__ = [
    "generate_correlation_id",
    "get_correlation_id",
    "record_comment_admission",
    "record_latency",
    "record_webhook_outcome",
    "reset_correlation_id",
    "set_correlation_id",
]
