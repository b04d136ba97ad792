"""Factories de stores e do gate de comentários a partir das settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.infra.stores import RedisDedupeStore, RedisJobQueue
from app.use_cases.instagram import CommentJobGate
from config.settings import get_dedupe_settings, get_instagram_settings

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

    from config.settings import DedupeSettings, InstagramSettings

logger = logging.getLogger(__name__)


def create_comment_job_gate(
    redis_client: AsyncRedis,
    *,
    dedupe_settings: DedupeSettings | None = None,
    instagram_settings: InstagramSettings | None = None,
) -> CommentJobGate:
    """Cria o gate de dedupe/enqueue sobre o cliente Redis injetado."""
    dedupe_settings = dedupe_settings or get_dedupe_settings()
    instagram_settings = instagram_settings or get_instagram_settings()

    job_queue = RedisJobQueue(redis_client)
    gate = CommentJobGate(
        RedisDedupeStore(redis_client),
        job_queue,
        atomic=job_queue if instagram_settings.atomic_enqueue else None,
        ttl_seconds=dedupe_settings.ttl_seconds,
        queue_name=dedupe_settings.queue_name,
        key_prefix=dedupe_settings.key_prefix,
    )
    logger.info(
        "comment_job_gate_created",
        extra={
            "queue": dedupe_settings.queue_name,
            "ttl_seconds": dedupe_settings.ttl_seconds,
            "atomic_enqueue": instagram_settings.atomic_enqueue,
        },
    )
    return gate
