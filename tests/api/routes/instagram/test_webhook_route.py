"""Testes dos endpoints de webhook Instagram."""

from __future__ import annotations

import hashlib
import hmac
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.requests import Request

from api.routes.instagram import webhook
from app.infra.stores import MemoryDedupeStore, MemoryJobQueue
from app.use_cases.instagram import CommentJobGate
from utils.errors import RedisConnectionError

SECRET = "secret"
SCENARIO_BODY = (
    b'{"object":"instagram","entry":[{"id":"1","time":1700000000,'
    b'"changes":[{"field":"comments","value":{"id":"c1","media_id":"m1"}}]}]}'
)


def _sign(payload: bytes, secret: str = SECRET) -> str:
    digest = hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()
    return f"sha256={digest}"


def _build_request(
    *,
    method: str,
    query_string: str = "",
    body: bytes = b"",
    headers: dict[str, str] | None = None,
    gate: object | None = None,
) -> Request:
    header_items = headers or {}
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "path": "/webhooks/instagram",
        "raw_path": b"/webhooks/instagram",
        "query_string": query_string.encode("utf-8"),
        "headers": raw_headers,
        "app": SimpleNamespace(state=SimpleNamespace(comment_job_gate=gate)),
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


def _signed_post(body: bytes, gate: object, **extra_headers: str) -> Request:
    headers = {
        "content-type": "application/json",
        "x-hub-signature-256": _sign(body),
    }
    headers.update(extra_headers)
    return _build_request(method="POST", body=body, headers=headers, gate=gate)


def _json(response: object) -> object:
    return json.loads(response.body.decode("utf-8"))  # type: ignore[attr-defined]


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> SimpleNamespace:
    fake = SimpleNamespace(app_secret=SECRET, verify_token="token")
    monkeypatch.setattr(webhook, "get_instagram_settings", lambda: fake)
    return fake


@pytest.fixture
def stores() -> tuple[CommentJobGate, MemoryDedupeStore, MemoryJobQueue]:
    dedupe = MemoryDedupeStore()
    queue = MemoryJobQueue()
    return CommentJobGate(dedupe, queue), dedupe, queue


class TestVerifyWebhook:
    @pytest.mark.asyncio
    async def test_verify_webhook_success(self, settings: SimpleNamespace) -> None:
        request = _build_request(
            method="GET",
            query_string="hub.mode=subscribe&hub.verify_token=token&hub.challenge=xyz",
        )
        response = await webhook.verify_webhook(request)

        assert response.status_code == 200
        assert response.body == b"xyz"
        assert response.media_type == "text/plain"

    @pytest.mark.asyncio
    async def test_verify_webhook_invalid_token(self, settings: SimpleNamespace) -> None:
        request = _build_request(
            method="GET",
            query_string="hub.mode=subscribe&hub.verify_token=wrong&hub.challenge=xyz",
        )
        response = await webhook.verify_webhook(request)

        assert response.status_code == 403
        assert response.body == b""

    @pytest.mark.asyncio
    async def test_verify_webhook_wrong_mode(self, settings: SimpleNamespace) -> None:
        request = _build_request(
            method="GET",
            query_string="hub.mode=unsubscribe&hub.verify_token=token&hub.challenge=xyz",
        )
        response = await webhook.verify_webhook(request)

        assert response.status_code == 403


class TestReceiveWebhook:
    @pytest.mark.asyncio
    async def test_valid_comment_is_enqueued(self, settings: SimpleNamespace, stores: tuple) -> None:
        gate, dedupe, queue = stores

        response = await webhook.receive_webhook(_signed_post(SCENARIO_BODY, gate))

        assert response.status_code == 200
        assert _json(response) == {"received": True}
        assert [json.loads(job) for job in queue.get_jobs("ig:comment_jobs")] == [
            {"commentId": "c1", "mediaId": "m1", "eventTime": 1700000000}
        ]
        assert dedupe.contains("ig:comment_seen:c1")

    @pytest.mark.asyncio
    async def test_replay_does_not_enqueue_again(self, settings: SimpleNamespace, stores: tuple) -> None:
        gate, _, queue = stores

        first = await webhook.receive_webhook(_signed_post(SCENARIO_BODY, gate))
        second = await webhook.receive_webhook(_signed_post(SCENARIO_BODY, gate))
        third = await webhook.receive_webhook(_signed_post(SCENARIO_BODY, gate))

        assert [r.status_code for r in (first, second, third)] == [200, 200, 200]
        assert _json(second) == {"received": True}
        assert len(queue.get_jobs("ig:comment_jobs")) == 1

    @pytest.mark.asyncio
    async def test_tampered_signature_is_rejected(self, settings: SimpleNamespace, stores: tuple) -> None:
        gate, dedupe, queue = stores
        tampered = _sign(SCENARIO_BODY)[:-1] + ("0" if _sign(SCENARIO_BODY)[-1] != "0" else "1")
        request = _build_request(
            method="POST",
            body=SCENARIO_BODY,
            headers={"content-type": "application/json", "x-hub-signature-256": tampered},
            gate=gate,
        )

        response = await webhook.receive_webhook(request)

        assert response.status_code == 401
        assert _json(response) == {"error": "Invalid signature"}
        assert queue.get_jobs("ig:comment_jobs") == []
        assert dedupe.contains("ig:comment_seen:c1") is False

    @pytest.mark.asyncio
    async def test_missing_signature_is_rejected(self, settings: SimpleNamespace, stores: tuple) -> None:
        gate, _, _ = stores
        request = _build_request(
            method="POST",
            body=SCENARIO_BODY,
            headers={"content-type": "application/json"},
            gate=gate,
        )

        response = await webhook.receive_webhook(request)

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_signed_non_json_body_is_malformed(self, settings: SimpleNamespace, stores: tuple) -> None:
        gate, _, _ = stores

        response = await webhook.receive_webhook(_signed_post(b"not json", gate))

        assert response.status_code == 400
        assert _json(response) == {"error": "Malformed JSON"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "headers",
        [
            {"content-type": "text/plain"},
            {"content-type": "application/x-www-form-urlencoded"},
            {},
        ],
    )
    async def test_non_json_content_type_is_malformed(
        self, settings: SimpleNamespace, stores: tuple, headers: dict[str, str]
    ) -> None:
        gate, _, queue = stores
        headers = {**headers, "x-hub-signature-256": _sign(SCENARIO_BODY)}
        request = _build_request(method="POST", body=SCENARIO_BODY, headers=headers, gate=gate)

        response = await webhook.receive_webhook(request)

        assert response.status_code == 400
        assert _json(response) == {"error": "Malformed JSON"}
        assert queue.get_jobs("ig:comment_jobs") == []

    @pytest.mark.asyncio
    async def test_json_content_type_with_charset_is_accepted(
        self, settings: SimpleNamespace, stores: tuple
    ) -> None:
        gate, _, queue = stores
        request = _signed_post(
            SCENARIO_BODY, gate, **{"content-type": "application/json; charset=utf-8"}
        )

        response = await webhook.receive_webhook(request)

        assert response.status_code == 200
        assert len(queue.get_jobs("ig:comment_jobs")) == 1

    @pytest.mark.asyncio
    async def test_empty_body_is_malformed(self, settings: SimpleNamespace, stores: tuple) -> None:
        gate, _, _ = stores

        response = await webhook.receive_webhook(_signed_post(b"", gate))

        assert response.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [b'{"object":"instagram"}', b"[]", b'"not json"', b'{"entry":{}}'],
    )
    async def test_unrecognized_shape_is_acknowledged(
        self, settings: SimpleNamespace, stores: tuple, body: bytes
    ) -> None:
        gate, _, queue = stores

        response = await webhook.receive_webhook(_signed_post(body, gate))

        assert response.status_code == 200
        assert _json(response) == {"received": True}
        assert queue.get_jobs("ig:comment_jobs") == []

    @pytest.mark.asyncio
    async def test_empty_entry_list_is_acknowledged(self, settings: SimpleNamespace, stores: tuple) -> None:
        gate, _, queue = stores

        response = await webhook.receive_webhook(
            _signed_post(b'{"object":"instagram","entry":[]}', gate)
        )

        assert response.status_code == 200
        assert queue.get_jobs("ig:comment_jobs") == []

    @pytest.mark.asyncio
    async def test_store_failure_returns_500(self, settings: SimpleNamespace) -> None:
        dedupe = MagicMock()
        dedupe.claim = AsyncMock(side_effect=RedisConnectionError("redis down"))
        gate = CommentJobGate(dedupe, MemoryJobQueue())

        response = await webhook.receive_webhook(_signed_post(SCENARIO_BODY, gate))

        assert response.status_code == 500
        assert _json(response) == {"error": "Internal server error"}

    @pytest.mark.asyncio
    async def test_missing_gate_returns_500(self, settings: SimpleNamespace) -> None:
        response = await webhook.receive_webhook(_signed_post(SCENARIO_BODY, None))

        assert response.status_code == 500

    @pytest.mark.asyncio
    async def test_correlation_id_is_reset_after_request(
        self, settings: SimpleNamespace, stores: tuple
    ) -> None:
        from app.observability import get_correlation_id

        gate, _, _ = stores
        await webhook.receive_webhook(
            _signed_post(SCENARIO_BODY, gate, **{"x-correlation-id": "cid-123"})
        )

        assert get_correlation_id() == ""

    @pytest.mark.asyncio
    async def test_empty_body_is_rejected_before_signature_check(
        self, settings: SimpleNamespace, stores: tuple
    ) -> None:
        gate, _, _ = stores
        request = _build_request(
            method="POST",
            body=b"",
            headers={"content-type": "application/json", "x-hub-signature-256": "sha256=bad"},
            gate=gate,
        )

        response = await webhook.receive_webhook(request)

        assert response.status_code == 400
        assert _json(response) == {"error": "Malformed JSON"}

    @pytest.mark.asyncio
    async def test_oversized_entry_time_keeps_whole_batch(
        self, settings: SimpleNamespace, stores: tuple
    ) -> None:
        gate, _, queue = stores
        body = (
            b'{"object":"instagram","entry":['
            b'{"id":"1","time":' + b"9" * 400 + b','
            b'"changes":[{"field":"comments","value":{"id":"c1","media_id":"m1"}}]},'
            b'{"id":"2","time":1700000100,'
            b'"changes":[{"field":"comments","value":{"id":"c2","media_id":"m2"}}]}]}'
        )

        response = await webhook.receive_webhook(_signed_post(body, gate))

        assert response.status_code == 200
        jobs = [json.loads(job) for job in queue.get_jobs("ig:comment_jobs")]
        assert sorted(job["commentId"] for job in jobs) == ["c1", "c2"]

    @pytest.mark.asyncio
    async def test_lone_surrogate_comment_id_is_skipped(
        self, settings: SimpleNamespace, stores: tuple
    ) -> None:
        gate, _, queue = stores
        body = (
            b'{"object":"instagram","entry":[{"id":"1","time":1700000000,"changes":['
            b'{"field":"comments","value":{"id":"\\ud800","media_id":"m1"}},'
            b'{"field":"comments","value":{"id":"c2","media_id":"m1"}}]}]}'
        )

        response = await webhook.receive_webhook(_signed_post(body, gate))

        assert response.status_code == 200
        assert [json.loads(job)["commentId"] for job in queue.get_jobs("ig:comment_jobs")] == [
            "c2"
        ]
