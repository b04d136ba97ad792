"""Settings base do serviço de webhooks.

Configurações comuns a todos os canais e serviços.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]

DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class BaseSettings:
    """Configurações base do sistema.

    Attributes:
        environment: Ambiente de execução (development|staging|production)
        service_name: Nome do serviço para logs
        redis_url: URL de conexão Redis (dedupe + fila de jobs)
        redis_timeout_seconds: Timeout de socket para chamadas ao Redis
        port: Porta HTTP do listener
        log_level: Nível de log raiz
    """

    # Ambiente
    environment: Environment = "development"
    service_name: str = "ig-comment-gateway"

    # Redis
    redis_url: str = ""
    redis_timeout_seconds: float = 5.0

    # HTTP
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def is_production(self) -> bool:
        """Retorna True se ambiente é produção."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Retorna True se ambiente é desenvolvimento."""
        return self.environment == "development"

    def validate(self) -> list[str]:
        """Valida configurações base.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        valid_envs = {"development", "staging", "production"}
        if self.environment not in valid_envs:
            errors.append(f"ENVIRONMENT inválido: {self.environment}")

        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")

        if not self.redis_url:
            errors.append("REDIS_URL não configurado")

        if self.redis_timeout_seconds <= 0:
            errors.append("REDIS_TIMEOUT_SECONDS deve ser > 0")

        if not 0 < self.port < 65536:
            errors.append(f"PORT inválida: {self.port}")

        return errors


def _parse_environment(env_str: str) -> Environment:
    """Converte string de ambiente para tipo Environment."""
    env_lower = env_str.lower()
    if env_lower in ("production", "prod"):
        return "production"
    if env_lower in ("staging", "stage"):
        return "staging"
    return "development"


def _parse_port(raw: str) -> int:
    """Converte PORT; valores não numéricos viram 0 e falham na validação."""
    try:
        return int(raw)
    except ValueError:
        return 0


def _load_base_from_env() -> BaseSettings:
    """Carrega BaseSettings de variáveis de ambiente."""
    return BaseSettings(
        environment=_parse_environment(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", "ig-comment-gateway"),
        redis_url=os.getenv("REDIS_URL", ""),
        redis_timeout_seconds=float(os.getenv("REDIS_TIMEOUT_SECONDS", "5")),
        port=_parse_port(os.getenv("PORT", "") or str(DEFAULT_PORT)),
        log_level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instância cacheada de BaseSettings."""
    return _load_base_from_env()
