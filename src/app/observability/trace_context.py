"""Root trace id da invocação corrente.

Trace id do span raiz OTel (ou UUID v4 quando o tracing está
desligado), fixado uma vez por callback e injetado nos logs
(correlation_id), no envelope e em cada publicação. Usa ContextVar
para ser async-safe: cada task do fan-out herda uma cópia do contexto
da invocação.

Uso:
    token = bind_root_trace_id(generate_root_trace_id())
    try:
        ...
    finally:
        reset_root_trace_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

_root_trace_id: ContextVar[str] = ContextVar("root_trace_id", default="")


def get_root_trace_id() -> str:
    """Retorna o root trace id do contexto atual (vazio se não definido)."""
    return _root_trace_id.get()


def bind_root_trace_id(root_trace_id: str | None = None) -> Token[str]:
    """Define o root trace id no contexto atual.

    Args:
        root_trace_id: ID a definir. Se None, gera um novo.

    Returns:
        Token para reset posterior via reset_root_trace_id().
    """
    return _root_trace_id.set(root_trace_id or generate_root_trace_id())


def reset_root_trace_id(token: Token[str]) -> None:
    """Restaura o root trace id ao valor anterior."""
    _root_trace_id.reset(token)


def generate_root_trace_id() -> str:
    """Gera um novo root trace id (UUID v4, 32 hex sem hífens)."""
    return uuid.uuid4().hex
