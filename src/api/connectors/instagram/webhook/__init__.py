"""Webhook Instagram: verificação, assinatura e parsing seguro."""

from ..signature import compute_hub_signature, verify_hub_signature
from .receive import (
    InvalidSignatureError,
    MalformedPayloadError,
    UnrecognizedShapeError,
    WebhookRequestError,
    parse_notification,
    parse_webhook_request,
)
from .verify import WebhookChallengeError, verify_webhook_challenge

__all__ = [
    "InvalidSignatureError",
    "MalformedPayloadError",
    "UnrecognizedShapeError",
    "WebhookChallengeError",
    "WebhookRequestError",
    "compute_hub_signature",
    "parse_notification",
    "parse_webhook_request",
    "verify_hub_signature",
    "verify_webhook_challenge",
]
