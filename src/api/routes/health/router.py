"""Endpoints de health check (liveness e readiness).

/ready depende só do Redis: sem ele nenhum comentário pode ser
deduplicado nem enfileirado. A profundidade da fila de jobs é
informativa e não afeta o status.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import get_dedupe_settings

logger = logging.getLogger(__name__)

router = APIRouter()

REDIS_PING_TIMEOUT_SECONDS = 2.0


class HealthResponse(BaseModel):
    """Resposta do liveness probe."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado da checagem do Redis."""

    status: Literal["ok", "failed"]
    latency_ms: float | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "latency_ms": self.latency_ms,
            "error": self.error,
        }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        service="ig-comment-gateway",
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe: 200 se o Redis responde ao PING, senão 503."""
    redis_client = getattr(request.app.state, "redis_client", None)
    redis_check = await _check_redis(redis_client)
    ready = redis_check.status == "ok"

    checks: dict[str, Any] = {"redis": redis_check.as_dict()}
    if ready:
        checks["comment_queue"] = await _describe_comment_queue(redis_client)

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": checks,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


async def _check_redis(redis_client: Any | None) -> DependencyCheck:
    if redis_client is None:
        return DependencyCheck(status="failed", error="not_configured")
    started_at = time.perf_counter()
    try:
        await asyncio.wait_for(redis_client.ping(), timeout=REDIS_PING_TIMEOUT_SECONDS)
    except TimeoutError:
        logger.warning("readiness_redis_check_failed", extra={"error_type": "timeout"})
        return DependencyCheck(status="failed", error="timeout")
    except Exception as exc:
        logger.warning("readiness_redis_check_failed", extra={"error_type": type(exc).__name__})
        return DependencyCheck(status="failed", error=type(exc).__name__)
    latency_ms = (time.perf_counter() - started_at) * 1000
    return DependencyCheck(status="ok", latency_ms=round(latency_ms, 2))


async def _describe_comment_queue(redis_client: Any) -> dict[str, Any]:
    queue_name = get_dedupe_settings().queue_name
    try:
        depth = await asyncio.wait_for(
            redis_client.llen(queue_name), timeout=REDIS_PING_TIMEOUT_SECONDS
        )
    except Exception as exc:
        return {"name": queue_name, "depth": None, "error": type(exc).__name__}
    return {"name": queue_name, "depth": int(depth), "error": None}
