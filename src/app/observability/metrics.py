"""Registro de métricas via structured logging.

As métricas são linhas de log estruturadas, agregáveis depois por
CloudWatch Insights, Cloud Logging, etc.

Métricas suportadas:
- Latência: tempo de execução por componente/operação
- Fan-out: destinos tentados e falhos por invocação
- Rejeição: callbacks recusados antes do fan-out, com motivo

Uso:
    start = time.perf_counter()
    # ... operação ...
    record_latency("lifecycle", "invoke", (time.perf_counter() - start) * 1000)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "lifecycle", "fanout")
        operation: Nome da operação (ex: "invoke", "publish")
        latency_ms: Latência em milissegundos
        correlation_id: Root trace id, quando fora do contexto da invocação
    """
    extra: dict[str, object] = {
        "metric_type": "latency",
        "component": component,
        "operation": operation,
        "latency_ms": round(latency_ms, 2),
    }
    if correlation_id:
        extra["correlation_id"] = correlation_id
    logger.info("metric_latency", extra=extra)


def record_fanout(
    backend: str,
    targets: int,
    failed: int,
    correlation_id: str | None = None,
) -> None:
    """Registra resultado agregado de um fan-out.

    Args:
        backend: Backend de filas (memory, redis, aws_iot, pubsub)
        targets: Número de destinos tentados
        failed: Número de destinos que falharam
        correlation_id: Root trace id, quando fora do contexto da invocação
    """
    extra: dict[str, object] = {
        "metric_type": "fanout",
        "component": "fanout",
        "backend": backend,
        "targets": targets,
        "failed": failed,
    }
    if correlation_id:
        extra["correlation_id"] = correlation_id
    logger.info("metric_fanout", extra=extra)


def record_rejection(reason: str, correlation_id: str | None = None) -> None:
    """Registra callback rejeitado (ex: stale_message, invalid_downlink)."""
    extra: dict[str, object] = {
        "metric_type": "rejection",
        "component": "lifecycle",
        "reason": reason,
    }
    if correlation_id:
        extra["correlation_id"] = correlation_id
    logger.info("metric_rejection", extra=extra)
