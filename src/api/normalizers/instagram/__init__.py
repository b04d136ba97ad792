"""Normalizer Instagram: extração de eventos de comentário.

Responsabilidades:
- Modelar o envelope de change notifications do Instagram
- Extrair CommentEvent de entry[].changes[] (field comments)
- Ignorar entries/changes malformados sem abortar o lote
"""

from .extractor import (
    COMMENT_FIELDS,
    as_comment_change,
    as_entry,
    extract_comment_events,
    extract_comment_identifiers,
    resolve_event_time,
)
from .models import Change, CommentEvent, Entry, NotificationEnvelope

__all__ = [
    "COMMENT_FIELDS",
    "Change",
    "CommentEvent",
    "Entry",
    "NotificationEnvelope",
    "as_comment_change",
    "as_entry",
    "extract_comment_events",
    "extract_comment_identifiers",
    "resolve_event_time",
]
