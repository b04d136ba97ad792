"""Logging estruturado JSON do gateway.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="ig_comment_gateway")
    logger = get_logger(__name__)
    logger.info("ig_comment_detected", extra={"comment_id": "c1"})

Todo record carrega asctime, level, logger, message, correlation_id e
service. Corpos de webhook e credenciais nunca são logados em claro.
"""

from config.logging.config import configure_logging, get_logger
from config.logging.filters import (
    SENSITIVE_LOG_FIELDS,
    CorrelationIdFilter,
    SecretRedactionFilter,
)
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    GatewayJsonFormatter,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "SENSITIVE_LOG_FIELDS",
    "CorrelationIdFilter",
    "GatewayJsonFormatter",
    "SecretRedactionFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
]
