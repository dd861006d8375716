"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging e tracing,
valida settings e conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_callback_lifecycle

    # Na inicialização do serviço
    initialize_app()

    lifecycle = get_callback_lifecycle()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import TYPE_CHECKING

from app.observability import get_root_trace_id, init_tracing
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_queue_settings,
    get_sigfox_settings,
    get_tracing_settings,
)

if TYPE_CHECKING:
    from app.coordinators.sigfox import SigfoxCallbackLifecycle
    from app.protocols.device_shadow import DeviceShadowProtocol
    from app.protocols.queue_transport import QueueTransportProtocol

# Nome do serviço para logs e métricas
SERVICE_NAME = "sigfox_callback"

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação: logging JSON e tracing.

    Deve ser chamada uma vez no início do serviço (ou do cold start
    da Lambda).
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_root_trace_id,
    )

    tracing = get_tracing_settings()
    if tracing.enabled:
        init_tracing(get_base_settings().service_name, tracing.otlp_endpoint)


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development`/`test` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    environment = base.environment
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"sigfox: {error}" for error in get_sigfox_settings().validate())
    errors.extend(f"queue: {error}" for error in get_queue_settings().validate(environment))
    errors.extend(f"tracing: {error}" for error in get_tracing_settings().validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


# ──────────────────────────────────────────────────────────────────────────────
# Getters (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_queue_transport() -> QueueTransportProtocol:
    """Obtém o transporte de filas (singleton)."""
    from app.bootstrap.dependencies import create_queue_transport
    return create_queue_transport()


@lru_cache(maxsize=1)
def get_device_shadow() -> DeviceShadowProtocol:
    """Obtém o device shadow (singleton)."""
    from app.bootstrap.dependencies import create_device_shadow
    return create_device_shadow()


@lru_cache(maxsize=1)
def get_callback_lifecycle() -> SigfoxCallbackLifecycle:
    """Obtém o lifecycle do callback ligado ao transporte do processo."""
    from app.bootstrap.dependencies import create_callback_lifecycle
    return create_callback_lifecycle(get_queue_transport())
