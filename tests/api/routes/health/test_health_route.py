"""Testes dos endpoints de health e readiness."""

from __future__ import annotations

import asyncio
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.requests import Request

from api.routes.health import router as health_module
from api.routes.health.router import health_check, readiness_check


def _build_request_with_state(state: SimpleNamespace) -> Request:
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/ready",
        "raw_path": b"/ready",
        "query_string": b"",
        "headers": [],
        "app": SimpleNamespace(state=state),
    }

    async def _receive() -> dict[str, object]:
        return {"type": "http.request", "body": b"", "more_body": False}

    return Request(scope, _receive)


@pytest.mark.asyncio
async def test_health_check_is_healthy() -> None:
    response = await health_check()

    assert response.status == "healthy"
    assert response.service == "ig-comment-gateway"


@pytest.mark.asyncio
async def test_readiness_returns_not_ready_without_redis() -> None:
    request = _build_request_with_state(SimpleNamespace(redis_client=None))

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["status"] == "not_ready"
    assert payload["checks"]["redis"] == {
        "status": "failed",
        "latency_ms": None,
        "error": "not_configured",
    }


@pytest.mark.asyncio
async def test_readiness_returns_ready_when_redis_answers() -> None:
    redis_client = MagicMock()
    redis_client.ping = AsyncMock(return_value=True)
    redis_client.llen = AsyncMock(return_value=7)
    request = _build_request_with_state(SimpleNamespace(redis_client=redis_client))

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["status"] == "ready"
    assert payload["checks"]["redis"]["status"] == "ok"
    assert payload["checks"]["comment_queue"] == {
        "name": "ig:comment_jobs",
        "depth": 7,
        "error": None,
    }
    redis_client.llen.assert_awaited_once_with("ig:comment_jobs")


@pytest.mark.asyncio
async def test_readiness_ignores_queue_depth_errors() -> None:
    redis_client = MagicMock()
    redis_client.ping = AsyncMock(return_value=True)
    redis_client.llen = AsyncMock(side_effect=ConnectionError("reset"))
    request = _build_request_with_state(SimpleNamespace(redis_client=redis_client))

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["checks"]["comment_queue"]["depth"] is None
    assert payload["checks"]["comment_queue"]["error"] == "ConnectionError"


@pytest.mark.asyncio
async def test_readiness_reports_redis_errors() -> None:
    redis_client = MagicMock()
    redis_client.ping = AsyncMock(side_effect=ConnectionError("refused"))
    request = _build_request_with_state(SimpleNamespace(redis_client=redis_client))

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["checks"]["redis"]["error"] == "ConnectionError"


@pytest.mark.asyncio
async def test_readiness_reports_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(health_module, "REDIS_PING_TIMEOUT_SECONDS", 0.01)

    async def _slow_ping() -> bool:
        await asyncio.sleep(1)
        return True

    redis_client = MagicMock()
    redis_client.ping = _slow_ping
    request = _build_request_with_state(SimpleNamespace(redis_client=redis_client))

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["checks"]["redis"]["error"] == "timeout"
