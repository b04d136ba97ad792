"""Parse e validação inicial do webhook Instagram (sem PII)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from api.normalizers.instagram.models import NotificationEnvelope

from ..signature import get_signature_header, verify_hub_signature

if TYPE_CHECKING:
    from collections.abc import Mapping


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class InvalidSignatureError(WebhookRequestError):
    """Assinatura inválida do webhook."""


class MalformedPayloadError(WebhookRequestError):
    """Corpo não é JSON válido."""


class UnrecognizedShapeError(WebhookRequestError):
    """JSON válido sem o formato esperado (objeto com lista em `entry`).

    Não é erro do cliente: a rota responde 200 para evitar retries da Meta
    em tipos de notificação que o serviço não trata.
    """


def _reject_constant(token: str) -> Any:
    raise ValueError(f"invalid_constant:{token}")


def parse_notification(raw_body: bytes) -> NotificationEnvelope:
    """Parseia o corpo bruto em NotificationEnvelope.

    Args:
        raw_body: Corpo bruto do request

    Raises:
        MalformedPayloadError: Se não for UTF-8/JSON válido
        UnrecognizedShapeError: Se não for objeto com `entry` em lista

    Returns:
        Envelope com as entradas ainda não validadas
    """
    try:
        payload = json.loads(raw_body.decode("utf-8"), parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise MalformedPayloadError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise UnrecognizedShapeError("payload_not_object")

    entries = payload.get("entry")
    if not isinstance(entries, list):
        raise UnrecognizedShapeError("missing_entry_list")

    object_type = payload.get("object")
    return NotificationEnvelope(
        object=object_type if isinstance(object_type, str) else "",
        entries=tuple(entries),
    )


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str,
) -> NotificationEnvelope:
    """Valida assinatura e parseia o payload do webhook.

    A assinatura é verificada antes de qualquer parse.

    Args:
        raw_body: Corpo bruto do request
        headers: Headers recebidos
        secret: App secret do Meta

    Raises:
        InvalidSignatureError: Se assinatura for inválida
        MalformedPayloadError: Se o JSON estiver inválido
        UnrecognizedShapeError: Se o payload não tiver o formato esperado

    Returns:
        NotificationEnvelope
    """
    if not verify_hub_signature(secret, raw_body, get_signature_header(headers)):
        raise InvalidSignatureError("invalid_signature")

    return parse_notification(raw_body)
