"""Agregador de settings de infraestrutura.

Re-exporta todas as settings de infraestrutura para uso externo.
"""

from __future__ import annotations

from config.settings.infra.queue import (
    QueueBackend,
    QueueSettings,
    get_queue_settings,
)
from config.settings.infra.tracing import (
    TracingSettings,
    get_tracing_settings,
)

__all__ = [
    # Queue transport
    "QueueBackend",
    "QueueSettings",
    # Tracing
    "TracingSettings",
    "get_queue_settings",
    "get_tracing_settings",
]
