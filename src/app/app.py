"""Entrypoint da aplicação Sigfox Callback.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080 --http httptools

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080 --http httptools

O protocolo httptools é obrigatório: a resposta do callback é 204 com
corpo JSON, que o h11 recusa.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from api.routes.sigfox.callback_tasks import drain_trailing_tasks
from app.bootstrap import get_queue_transport, initialize_app, validate_runtime_settings
from config.logging import get_logger
from utils.errors import InfrastructureError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging e tracing ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações
    - Cria o transporte de filas e tenta prepará-lo (ex: endpoint IoT)

    Shutdown:
    - Aguarda encerramentos pendentes (logs, spans)
    - Fecha conexões do transporte
    """
    logger.info("app_starting")
    validate_runtime_settings()

    transport = get_queue_transport()
    app.state.queue_transport = transport
    try:
        await transport.prepare()
    except InfrastructureError as exc:
        # Cada invocação tenta de novo; readiness reporta o estado
        logger.warning(
            "queue_transport_not_ready",
            extra={"backend": transport.name, "error_type": type(exc).__name__},
        )

    yield

    logger.info("app_shutting_down")
    await drain_trailing_tasks(timeout_seconds=30.0)
    await transport.close()


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="Sigfox Callback",
        description="Recepção de mensagens Sigfox, fan-out para filas e resposta de downlink",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url=None,
        openapi_url="/openapi.json",
    )

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured")

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("Starting Sigfox Callback in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        http="httptools",
        reload=True,
    )


if __name__ == "__main__":
    main()
