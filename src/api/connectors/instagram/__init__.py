"""Conector Instagram - adapter de borda para webhooks da Meta.

Responsabilidades:
- Webhook (receive, verify, signature)
"""

from .signature import (
    SIGNATURE_HEADER,
    compute_hub_signature,
    get_signature_header,
    verify_hub_signature,
)

__all__ = [
    "SIGNATURE_HEADER",
    "compute_hub_signature",
    "get_signature_header",
    "verify_hub_signature",
]
