"""Rotas HTTP do gateway.

- routes/instagram/: GET/POST /webhooks/instagram
- routes/health/: /health (liveness) e /ready (Redis + profundidade da fila)
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
