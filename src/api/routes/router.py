"""Router raiz da API: health na raiz e webhook Instagram sob /webhooks."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.instagram.router import router as instagram_router


def create_api_router() -> APIRouter:
    api_router = APIRouter()
    api_router.include_router(health_router, tags=["health"])
    api_router.include_router(instagram_router, tags=["instagram"])
    return api_router
