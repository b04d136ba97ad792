"""Normalizers por canal: conversão de payloads externos para modelos internos.

Estrutura:
- instagram/: envelope de change notifications e extração de comentários
"""

from .instagram import CommentEvent, NotificationEnvelope, extract_comment_events

__all__ = [
    "CommentEvent",
    "NotificationEnvelope",
    "extract_comment_events",
]
