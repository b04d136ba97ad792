"""Validação de assinatura HMAC-SHA256 (X-Hub-Signature-256) da Meta.

A assinatura é calculada sobre os bytes exatos do corpo recebido.
Nunca re-serializar o JSON parseado antes de validar.
"""

from __future__ import annotations

import hashlib
import hmac
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

SIGNATURE_HEADER = "X-Hub-Signature-256"
SIGNATURE_PREFIX = "sha256="


def compute_hub_signature(secret: str, raw_body: bytes) -> str:
    """Calcula o valor esperado do header X-Hub-Signature-256.

    Args:
        secret: App secret compartilhado com a Meta
        raw_body: Corpo bruto da requisição

    Returns:
        "sha256=" + hex do HMAC-SHA256
    """
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def verify_hub_signature(
    secret: str,
    raw_body: bytes,
    signature_header: str | None,
) -> bool:
    """Valida a assinatura do webhook em tempo constante.

    Secret vazio, header ausente, sem prefixo "sha256=" ou com tamanho
    diferente do esperado resulta em False. Nunca levanta exceção.

    Args:
        secret: App secret compartilhado com a Meta
        raw_body: Corpo bruto da requisição
        signature_header: Valor de X-Hub-Signature-256 (pode ser None)

    Returns:
        True se assinatura válida
    """
    if not secret or not isinstance(secret, str):
        return False

    if not signature_header or not isinstance(signature_header, str):
        return False

    received = signature_header.strip()
    if not received.startswith(SIGNATURE_PREFIX):
        return False

    try:
        expected = compute_hub_signature(secret, raw_body).encode("utf-8")
        received_bytes = received.encode("utf-8")
    except (AttributeError, TypeError, UnicodeError):
        return False

    # Tamanhos diferentes não passam para compare_digest
    if len(expected) != len(received_bytes):
        return False

    return hmac.compare_digest(expected, received_bytes)


def get_signature_header(headers: Mapping[str, str]) -> str | None:
    """Busca X-Hub-Signature-256 sem diferenciar maiúsculas/minúsculas."""
    wanted = SIGNATURE_HEADER.lower()
    for name, value in headers.items():
        if name.lower() == wanted:
            return value
    return None
