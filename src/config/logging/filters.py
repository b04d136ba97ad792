"""Filters de logging do gateway.

- CorrelationIdFilter: injeta correlation_id e service em todo record
- SecretRedactionFilter: mascara atributos com credenciais do webhook
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

# Atributos de `extra` que nunca podem sair em claro
SENSITIVE_LOG_FIELDS = frozenset(
    {
        "app_secret",
        "verify_token",
        "hub_verify_token",
        "signature",
        "signature_header",
        "x_hub_signature_256",
        "authorization",
        "raw_body",
    }
)

REDACTED = "[REDACTED]"


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual
            (string vazia se não fornecida).
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        # correlation_id explícito via extra tem prioridade
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class SecretRedactionFilter(logging.Filter):
    """Substitui por [REDACTED] atributos sensíveis passados via extra.

    Nunca descarta o record; só reescreve os valores.
    """

    def __init__(self, fields: Iterable[str] = SENSITIVE_LOG_FIELDS) -> None:
        super().__init__()
        self._fields = frozenset(fields)

    def filter(self, record: logging.LogRecord) -> bool:
        for name in self._fields.intersection(record.__dict__):
            if record.__dict__[name]:
                record.__dict__[name] = REDACTED
        return True
