"""Entrypoint do gateway de webhooks Instagram.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 3000

Uso (desenvolvimento):
    python -m app.app
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.clients import close_redis, connect_redis, create_async_redis_client
from app.bootstrap.dependencies import create_comment_job_gate
from config.logging import get_logger
from config.settings import get_base_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações (falha impede o boot)
    - Conecta no Redis (PING) e monta o gate de comentários

    Shutdown (SIGINT/SIGTERM via uvicorn):
    - Fecha a conexão Redis
    """
    logger.info("app_starting", extra={"service": "ig-comment-gateway"})
    validate_runtime_settings()

    redis_client = create_async_redis_client(get_base_settings())
    app.state.redis_client = redis_client
    try:
        await connect_redis(redis_client)
    except Exception:
        logger.exception("redis_connection_failed")
        await close_redis(redis_client)
        raise

    app.state.comment_job_gate = create_comment_job_gate(redis_client)

    try:
        yield
    finally:
        logger.info("app_shutting_down", extra={"service": "ig-comment-gateway"})
        await close_redis(getattr(app.state, "redis_client", None))
        app.state.redis_client = None
        app.state.comment_job_gate = None


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI."""
    fastapi_app = FastAPI(
        title="ig-comment-gateway",
        description="Gateway de webhooks de comentários do Instagram",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": "ig-comment-gateway"})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta."""
    import uvicorn

    port = get_base_settings().port
    logger.info("instagram_webhook_listener_starting", extra={"port": port})
    uvicorn.run(app, host="0.0.0.0", port=port, log_config=None)


if __name__ == "__main__":
    main()
