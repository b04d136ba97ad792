"""Router principal do Instagram: agrega todos os endpoints do canal."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.instagram.webhook import router as webhook_router

# /webhooks/<provider>
WEBHOOK_PREFIX = "/webhooks/instagram"

router = APIRouter()

# Webhook endpoints (GET para challenge, POST para eventos)
router.include_router(webhook_router, prefix=WEBHOOK_PREFIX)
