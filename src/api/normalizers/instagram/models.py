"""Modelos do payload de webhook Instagram (change notifications).

Representação tipada mas permissiva: o envelope mantém as entradas
como valores JSON brutos e o extrator decide, item a item, o que é
válido. Entry e Change só existem depois de passar pelos predicados.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class NotificationEnvelope:
    """Envelope de nível superior ({"object": ..., "entry": [...]})."""

    object: str
    entries: tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class Entry:
    """Entrada válida: id string e lista de changes."""

    id: str
    time: Any
    changes: tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class Change:
    """Change de comentário com value já validado como objeto."""

    field: str
    value: Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class CommentEvent:
    """Unidade canônica entregue à fila de jobs.

    Attributes:
        comment_id: ID do comentário (não vazio)
        media_id: ID da mídia comentada (não vazio)
        event_time: Unix seconds do evento
    """

    comment_id: str
    media_id: str
    event_time: int

    def to_job(self) -> dict[str, Any]:
        """Registro de job no formato consumido pelo worker."""
        return {
            "commentId": self.comment_id,
            "mediaId": self.media_id,
            "eventTime": self.event_time,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_job(), separators=(",", ":"))
