"""Protocolos e contratos do core da aplicação."""

from .dedupe import AsyncDedupeProtocol
from .job_queue import AsyncAtomicEnqueueProtocol, AsyncJobQueueProtocol

__all__ = [
    "AsyncAtomicEnqueueProtocol",
    "AsyncDedupeProtocol",
    "AsyncJobQueueProtocol",
]
