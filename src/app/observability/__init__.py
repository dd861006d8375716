"""Observabilidade: root trace id, tracing e métricas.

Uso:
    from app.observability import bind_root_trace_id, get_root_trace_id
    from app.observability import record_fanout, record_latency
"""

from app.observability.metrics import (
    record_fanout,
    record_latency,
    record_rejection,
)
from app.observability.trace_context import (
    bind_root_trace_id,
    generate_root_trace_id,
    get_root_trace_id,
    reset_root_trace_id,
)
from app.observability.tracing import (
    end_task,
    get_tracer,
    init_tracing,
    scalar_attributes,
    start_root_span,
    trace_id_of,
)

__all__ = [
    "bind_root_trace_id",
    "end_task",
    "generate_root_trace_id",
    "get_root_trace_id",
    "get_tracer",
    "init_tracing",
    "record_fanout",
    "record_latency",
    "record_rejection",
    "reset_root_trace_id",
    "scalar_attributes",
    "start_root_span",
    "trace_id_of",
]
