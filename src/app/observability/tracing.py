"""Tracing distribuído via OpenTelemetry.

Um span raiz por invocação do callback e um span filho por publicação
do fan-out. O provider é instalado uma vez no bootstrap; sem endpoint
OTLP os spans continuam recebendo ids reais, só não são exportados.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

TRACER_NAME = "sigfox_callback"

_tracing_initialized = False


def _normalize_http_endpoint(endpoint: str) -> str:
    """Garante o sufixo /v1/traces exigido pelo exporter HTTP."""
    if endpoint.endswith("/v1/traces"):
        return endpoint
    return endpoint.rstrip("/") + "/v1/traces"


def init_tracing(service_name: str, otlp_endpoint: str = "") -> bool:
    """Instala o TracerProvider global (idempotente).

    Args:
        service_name: Valor de service.name no Resource.
        otlp_endpoint: Endpoint OTLP/HTTP; vazio = sem exporter.

    Returns:
        True se esta chamada instalou o provider.
    """
    global _tracing_initialized
    if _tracing_initialized:
        return False

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    if otlp_endpoint:
        exporter = OTLPSpanExporter(endpoint=_normalize_http_endpoint(otlp_endpoint))
        provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(provider)
    _tracing_initialized = True

    logger.info(
        "tracing_initialized",
        extra={"exporter": "otlp_http" if otlp_endpoint else "none"},
    )
    return True


def get_tracer() -> trace.Tracer:
    """Retorna o tracer do serviço."""
    return trace.get_tracer(TRACER_NAME)


def start_root_span(name: str) -> trace.Span:
    """Abre o span raiz de uma invocação.

    O span não é ativado no contexto: quem abre é responsável por
    encerrá-lo via end_task(), normalmente na tarefa destacada.
    """
    return get_tracer().start_span(name)


def trace_id_of(span: trace.Span) -> str:
    """Trace id OTel do span em hex (32 chars); vazio se o contexto é inválido.

    Sem TracerProvider instalado os spans são no-op e não têm trace id.
    """
    span_context = span.get_span_context()
    if not span_context.is_valid:
        return ""
    return trace.format_trace_id(span_context.trace_id)


def scalar_attributes(body: Mapping[str, Any]) -> dict[str, Any]:
    """Filtra os campos do corpo aceitos como atributos de span.

    dict, list e None são ignorados; NaN vira string para não poluir
    agregações numéricas no backend.
    """
    attributes: dict[str, Any] = {}
    for key, value in body.items():
        if value is None or isinstance(value, (dict, list)):
            continue
        if isinstance(value, float) and math.isnan(value):
            attributes[key] = "NaN"
        elif isinstance(value, (str, bool, int, float)):
            attributes[key] = value
        else:
            attributes[key] = str(value)
    return attributes


def end_task(span: trace.Span | None) -> None:
    """Encerra o span e força o flush do provider.

    Chamada bloqueante: rodar fora do event loop (asyncio.to_thread).
    """
    if span is not None:
        span.end()
    provider = trace.get_tracer_provider()
    force_flush = getattr(provider, "force_flush", None)
    if force_flush is not None:
        force_flush()
