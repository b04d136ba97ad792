"""Extrator de eventos de comentário do webhook Instagram.

Estrutura do webhook (change notifications):
- entry[].changes[] com field "comments" (ou "instagram_comments")
- value contém comment_id/id e media_id

Processamento tolerante item a item: entry ou change malformado é
ignorado sem abortar os irmãos do mesmo payload (a Meta agrupa várias
entradas por entrega).
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable, Mapping
from typing import Any

from .models import Change, CommentEvent, Entry, NotificationEnvelope

COMMENT_FIELDS = frozenset({"comments", "instagram_comments"})

Clock = Callable[[], float]


def as_entry(item: Any) -> Entry | None:
    """Retorna Entry se o item tiver id string e changes em lista."""
    if not isinstance(item, Mapping):
        return None
    entry_id = item.get("id")
    changes = item.get("changes")
    if not isinstance(entry_id, str) or not isinstance(changes, list):
        return None
    return Entry(id=entry_id, time=item.get("time"), changes=tuple(changes))


def as_comment_change(item: Any) -> Change | None:
    """Retorna Change se for um change de comentário com value objeto."""
    if not isinstance(item, Mapping):
        return None
    field = item.get("field")
    value = item.get("value")
    if not isinstance(field, str) or not isinstance(value, Mapping):
        return None
    if field.lower() not in COMMENT_FIELDS:
        return None
    return Change(field=field, value=value)


def _is_encodable(identifier: str) -> bool:
    # JSON aceita surrogates isolados ("\ud800"), que não viram UTF-8
    try:
        identifier.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def extract_comment_identifiers(
    value: Mapping[str, Any],
) -> tuple[str | None, str | None]:
    """Extrai (comment_id, media_id) de um change de comentário.

    comment_id tem prioridade sobre id. Strings vazias ou que não podem
    ser codificadas em UTF-8 contam como ausentes.
    """
    comment_id = value.get("comment_id")
    if not isinstance(comment_id, str):
        comment_id = value.get("id")
        if not isinstance(comment_id, str):
            comment_id = None

    media_id = value.get("media_id")
    if not isinstance(media_id, str):
        media_id = None

    if comment_id and not _is_encodable(comment_id):
        comment_id = None
    if media_id and not _is_encodable(media_id):
        media_id = None

    return comment_id or None, media_id or None


def resolve_event_time(entry_time: Any, clock: Clock | None = None) -> int:
    """Retorna entry.time em unix seconds ou o horário atual como fallback.

    Aceita números e strings numéricas; bool, zero, NaN, infinitos e
    inteiros grandes demais para float caem no fallback.
    """
    candidate: float | None = None
    try:
        if isinstance(entry_time, (int, float)) and not isinstance(entry_time, bool):
            candidate = float(entry_time)
        elif isinstance(entry_time, str):
            candidate = float(entry_time.strip())
    except (ValueError, OverflowError):
        candidate = None

    if candidate is not None and math.isfinite(candidate) and candidate != 0:
        return int(candidate)

    now = clock or time.time
    return int(now())


def extract_comment_events(
    envelope: NotificationEnvelope,
    *,
    clock: Clock | None = None,
) -> list[CommentEvent]:
    """Extrai eventos de comentário na ordem do payload.

    Args:
        envelope: Envelope já parseado
        clock: Fonte de unix seconds para entries sem time (default: time.time)

    Returns:
        Lista de CommentEvent (pode ser vazia)
    """
    events: list[CommentEvent] = []
    for item in envelope.entries:
        entry = as_entry(item)
        if entry is None:
            continue

        event_time = resolve_event_time(entry.time, clock)

        for raw_change in entry.changes:
            change = as_comment_change(raw_change)
            if change is None:
                continue

            comment_id, media_id = extract_comment_identifiers(change.value)
            if comment_id is None or media_id is None:
                continue

            events.append(
                CommentEvent(
                    comment_id=comment_id,
                    media_id=media_id,
                    event_time=event_time,
                )
            )
    return events
