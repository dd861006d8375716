"""Resolução dos destinos de fila de uma mensagem Sigfox.

Modos:
- single: uma única fila catch-all (<prefix>.received); o roteamento
  para device/type fica a cargo de quem consome essa fila.
- multi: <prefix>.devices.all, <prefix>.types.<type> e por último
  <prefix>.devices.<device>, que pode ainda não existir no backend.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.envelope import QueueTarget

if TYPE_CHECKING:
    from config.settings.infra.queue import QueueBackend
    from config.settings.sigfox import FanoutMode

ALL_DEVICES = "all"

# Backends que entregam numa fila única e roteiam depois
_SINGLE_QUEUE_BACKENDS = frozenset({"aws_iot"})


def default_fanout_mode(backend: QueueBackend) -> FanoutMode:
    """Modo padrão do backend quando SIGFOX_FANOUT_MODE não está definido."""
    return "single" if backend in _SINGLE_QUEUE_BACKENDS else "multi"


def resolve_queue_targets(
    device: str | None,
    device_type: str | None,
    mode: FanoutMode,
) -> list[QueueTarget]:
    """Calcula os destinos do fan-out.

    Args:
        device: Device id normalizado (None se ausente).
        device_type: Tipo vindo da query `type` (None se ausente).
        mode: single ou multi.

    Returns:
        Lista ordenada de destinos (nunca vazia).
    """
    if mode == "single":
        return [QueueTarget(device=None, type=None)]

    targets = [QueueTarget(device=ALL_DEVICES)]
    if device_type:
        targets.append(QueueTarget(type=device_type))
    if device:
        targets.append(QueueTarget(device=device))
    return targets
