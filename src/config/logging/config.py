"""Setup do logging do processo (chamado por app.bootstrap.initialize_app).

O root logger recebe um único handler JSON; uvicorn roda com
log_config=None, então os logs do servidor também passam por ele.
"""

from __future__ import annotations

import logging
from typing import IO, TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, SecretRedactionFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "ig_comment_gateway"


def _build_handler(
    service_name: str,
    correlation_id_getter: Callable[[], str] | None,
    stream: IO[str] | None,
) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(SecretRedactionFilter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    return handler


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Instala o handler JSON no root logger, substituindo os anteriores.

    Args:
        level: LOG_LEVEL (case insensitive).
        service_name: Valor do campo service.
        correlation_id_getter: Lê o correlation_id da requisição corrente.
        stream: Destino das linhas (default: stderr).

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [_build_handler(service_name, correlation_id_getter, stream)]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
