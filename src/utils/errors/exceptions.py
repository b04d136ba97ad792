"""Exceções de infraestrutura do gateway.

Toda falha de store vira InfrastructureError: o endpoint responde 500
e a Meta reentrega o webhook mais tarde.
"""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Falha transitória de infraestrutura.

    Attributes:
        operation: Operação que falhou (ex: "claim", "push"), para logs
    """

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation


class RedisConnectionError(InfrastructureError):
    """Falha de conexão/timeout ao acessar Redis."""
