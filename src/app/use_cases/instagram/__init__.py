"""Use cases específicos de Instagram."""

from .enqueue_comment_jobs import CommentJobGate, EnqueueSummary, enqueue_comment_events

__all__ = [
    "CommentJobGate",
    "EnqueueSummary",
    "enqueue_comment_events",
]
