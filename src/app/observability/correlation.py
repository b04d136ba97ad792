"""Correlation_id por requisição de webhook.

O valor vem do header x-correlation-id (quando seguro) ou é gerado,
e é injetado em todos os logs pelo CorrelationIdFilter.
Usa ContextVar: cada request no event loop enxerga o próprio valor.
"""

from __future__ import annotations

import re
import uuid
from contextvars import ContextVar, Token

# Header vem de fora: só aceitamos ids curtos sem caracteres de controle
_SAFE_CORRELATION_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (ou string vazia)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID recebido. Se None ou inseguro, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    if correlation_id and _SAFE_CORRELATION_ID.match(correlation_id):
        value = correlation_id
    else:
        value = generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())
