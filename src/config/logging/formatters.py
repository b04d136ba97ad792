"""Formatter JSON dos logs do gateway (python-json-logger).

Uma linha por evento, por exemplo:
    {"asctime": "...", "level": "WARNING",
     "logger": "api.routes.instagram.webhook",
     "message": "signature_verification_failed",
     "correlation_id": "5f0c...", "service": "ig_comment_gateway",
     "channel": "instagram", "payload_size": 312}
"""

from __future__ import annotations

from typing import Any

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

# Campos obrigatórios já com os nomes de saída
_OUTPUT_FIELDS = frozenset(FIELD_RENAME_MAP.get(field, field) for field in REQUIRED_LOG_FIELDS)


class GatewayJsonFormatter(JsonFormatter):
    """JsonFormatter que omite atributos de `extra` com valor None.

    Ex: `operation` só aparece em falhas de store; `latency_ms` só
    quando a checagem mediu algo.
    """

    def process_log_record(self, log_data: dict[str, Any]) -> dict[str, Any]:
        return {
            key: value
            for key, value in log_data.items()
            if value is not None or key in _OUTPUT_FIELDS
        }


def create_json_formatter() -> GatewayJsonFormatter:
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return GatewayJsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)
