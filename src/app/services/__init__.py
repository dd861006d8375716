"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.downlink_source import StaticDownlinkSource
from app.services.fanout_dispatcher import FanoutDispatcher, FanoutResult
from app.services.queue_targets import default_fanout_mode, resolve_queue_targets

__all__ = [
    "FanoutDispatcher",
    "FanoutResult",
    "StaticDownlinkSource",
    "default_fanout_mode",
    "resolve_queue_targets",
]
