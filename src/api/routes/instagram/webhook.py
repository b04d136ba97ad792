"""Endpoints de webhook do Instagram.

Endpoints:
- GET /webhooks/instagram: verificação de webhook (Meta challenge)
- POST /webhooks/instagram: recebimento de change notifications

Fluxo POST:
1. Corpo bruto (application/json) → assinatura X-Hub-Signature-256
2. Parse do envelope → extração de comentários
3. Dedupe + enqueue por evento (processamento pesado fica com os workers)

Segurança:
- Validação HMAC obrigatória antes de qualquer parse
- Formatos não reconhecidos respondem 200 para evitar retry da Meta
- A resposta nunca revela o resultado de dedupe por evento
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from api.connectors.instagram.webhook.receive import (
    InvalidSignatureError,
    MalformedPayloadError,
    UnrecognizedShapeError,
    parse_webhook_request,
)
from api.connectors.instagram.webhook.verify import (
    WebhookChallengeError,
    verify_webhook_challenge,
)
from app.observability import (
    record_webhook_outcome,
    reset_correlation_id,
    set_correlation_id,
)
from app.use_cases.instagram import enqueue_comment_events
from config.settings import get_instagram_settings

if TYPE_CHECKING:
    from app.use_cases.instagram import CommentJobGate

logger = logging.getLogger(__name__)

router = APIRouter()

JSON_MEDIA_TYPE = "application/json"


def _received() -> JSONResponse:
    return JSONResponse(content={"received": True}, status_code=status.HTTP_200_OK)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(content={"error": message}, status_code=status_code)


async def _read_raw_json_body(request: Request) -> bytes | None:
    """Lê o corpo bruto apenas se for JSON não vazio.

    Returns:
        Bytes exatos recebidos, ou None se content-type não for JSON
        ou o corpo estiver vazio.
    """
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type != JSON_MEDIA_TYPE:
        return None

    raw_body = await request.body()
    return raw_body or None


def _get_comment_job_gate(request: Request) -> CommentJobGate:
    """Gate criado no lifespan (app.state.comment_job_gate)."""
    gate = getattr(request.app.state, "comment_job_gate", None)
    if gate is None:
        msg = "comment_job_gate não inicializado"
        raise RuntimeError(msg)
    return gate


@router.get("")
async def verify_webhook(request: Request) -> Response:
    """Verificação de webhook: responde ao challenge da Meta.

    Query params esperados:
    - hub.mode: deve ser "subscribe"
    - hub.verify_token: deve corresponder ao configurado
    - hub.challenge: valor a retornar

    Returns:
        Texto do challenge ou 403 sem corpo.
    """
    settings = get_instagram_settings()

    hub_mode = request.query_params.get("hub.mode")

    try:
        challenge = verify_webhook_challenge(
            hub_mode=hub_mode,
            hub_verify_token=request.query_params.get("hub.verify_token"),
            hub_challenge=request.query_params.get("hub.challenge"),
            expected_token=settings.verify_token,
        )
    except WebhookChallengeError as exc:
        logger.warning(
            "webhook_verification_failed",
            extra={"channel": "instagram", "error": str(exc)},
        )
        return Response(status_code=status.HTTP_403_FORBIDDEN)

    logger.info(
        "webhook_verified",
        extra={"channel": "instagram", "hub_mode": hub_mode},
    )
    # Meta espera o challenge como texto puro
    return Response(
        content=challenge,
        media_type="text/plain",
        status_code=status.HTTP_200_OK,
    )


@router.post("")
async def receive_webhook(request: Request) -> Response:
    """Recebimento de change notifications do Instagram.

    Respostas:
    - 200 {"received": true}: processado ou formato não reconhecido
    - 400 {"error": "Malformed JSON"}: corpo ausente/não JSON
    - 401 {"error": "Invalid signature"}: assinatura inválida
    - 500 {"error": "Internal server error"}: falha no dedupe/enqueue
    """
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        return await _handle_notification(request)
    finally:
        reset_correlation_id(token)


async def _handle_notification(request: Request) -> Response:
    settings = get_instagram_settings()

    raw_body = await _read_raw_json_body(request)
    if raw_body is None:
        logger.warning("invalid_payload_body", extra={"channel": "instagram"})
        record_webhook_outcome(status.HTTP_400_BAD_REQUEST, "invalid_payload_body")
        return _error("Malformed JSON", status.HTTP_400_BAD_REQUEST)

    try:
        envelope = parse_webhook_request(
            raw_body=raw_body,
            headers=request.headers,
            secret=settings.app_secret,
        )
    except InvalidSignatureError:
        logger.warning(
            "signature_verification_failed",
            extra={"channel": "instagram", "payload_size": len(raw_body)},
        )
        record_webhook_outcome(status.HTTP_401_UNAUTHORIZED, "invalid_signature")
        return _error("Invalid signature", status.HTTP_401_UNAUTHORIZED)
    except MalformedPayloadError as exc:
        logger.warning(
            "json_parse_error",
            extra={"channel": "instagram", "error": str(exc)},
        )
        record_webhook_outcome(status.HTTP_400_BAD_REQUEST, "malformed_json")
        return _error("Malformed JSON", status.HTTP_400_BAD_REQUEST)
    except UnrecognizedShapeError as exc:
        logger.warning(
            "unexpected_payload_shape",
            extra={"channel": "instagram", "error": str(exc)},
        )
        record_webhook_outcome(status.HTTP_200_OK, "unrecognized_shape")
        return _received()

    try:
        summary = await enqueue_comment_events(envelope, _get_comment_job_gate(request))
    except Exception as exc:
        logger.exception(
            "webhook_processing_error",
            extra={
                "channel": "instagram",
                "error_type": type(exc).__name__,
                "operation": getattr(exc, "operation", None),
            },
        )
        record_webhook_outcome(status.HTTP_500_INTERNAL_SERVER_ERROR, "processing_error")
        return _error("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.info(
        "webhook_received",
        extra={
            "channel": "instagram",
            "object": envelope.object,
            "entries": len(envelope.entries),
            "extracted": summary.extracted,
            "enqueued": summary.enqueued,
            "duplicates": summary.duplicates,
        },
    )
    record_webhook_outcome(status.HTTP_200_OK, "received")
    return _received()
