"""Exceções compartilhadas entre stores, bootstrap e rotas."""

from .exceptions import InfrastructureError, RedisConnectionError

__all__ = ["InfrastructureError", "RedisConnectionError"]
