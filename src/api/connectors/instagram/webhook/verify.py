"""Verificação de webhook exigida pela Meta (handshake de assinatura)."""

from __future__ import annotations

SUBSCRIBE_MODE = "subscribe"


class WebhookChallengeError(ValueError):
    """Erro de verificação do desafio do webhook."""


def verify_webhook_challenge(
    hub_mode: str | None,
    hub_verify_token: str | None,
    hub_challenge: str | None,
    expected_token: str | None,
) -> str:
    """Valida challenge de webhook e retorna o conteúdo a ser respondido.

    Args:
        hub_mode: Valor de hub.mode
        hub_verify_token: Valor de hub.verify_token
        hub_challenge: Valor de hub.challenge
        expected_token: Token configurado no servidor

    Raises:
        WebhookChallengeError: Se token ausente/inválido ou challenge ausente

    Returns:
        Challenge a devolver como texto puro
    """
    if not expected_token:
        raise WebhookChallengeError("missing_verify_token")

    if hub_mode != SUBSCRIBE_MODE or hub_verify_token != expected_token:
        raise WebhookChallengeError("verification_failed")

    if hub_challenge is None:
        raise WebhookChallengeError("missing_challenge")

    return hub_challenge
