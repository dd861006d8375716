"""Use case do callback Sigfox.

Etapas (chamadas em ordem pelo lifecycle, que controla os estados):
carimbo -> normalização -> frescor -> fan-out -> resposta de downlink.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from api.normalizers.sigfox import normalize_message_body
from api.validators.sigfox import check_freshness
from app.domain.envelope import MessageEnvelope
from app.services.queue_targets import resolve_queue_targets
from app.use_cases.sigfox._callback_helpers import resolve_device, stamp_callback
from config.settings.sigfox import DEFAULT_MAX_MESSAGE_AGE_MS

if TYPE_CHECKING:
    from collections.abc import Callable

    from opentelemetry.trace import Span

    from api.payload_builders.sigfox import DownlinkResponseComposer
    from app.protocols.queue_transport import QueueTransportProtocol
    from app.services.fanout_dispatcher import FanoutDispatcher, FanoutResult
    from config.settings.sigfox import FanoutMode

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class ProcessSigfoxCallbackUseCase:
    """Processa uma mensagem entregue pelo callback Sigfox."""

    def __init__(
        self,
        *,
        transport: QueueTransportProtocol,
        dispatcher: FanoutDispatcher,
        composer: DownlinkResponseComposer,
        fanout_mode: FanoutMode,
        max_message_age_ms: int = DEFAULT_MAX_MESSAGE_AGE_MS,
        local_time_offset_hours: int = 8,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self._transport = transport
        self._dispatcher = dispatcher
        self._composer = composer
        self._fanout_mode = fanout_mode
        self._max_message_age_ms = max_message_age_ms
        self._local_time_offset_hours = local_time_offset_hours
        self._clock = clock

    @property
    def backend(self) -> str:
        return self._transport.name

    def stamp(self, raw: dict[str, Any], query: dict[str, str]) -> tuple[dict[str, Any], str | None]:
        """Carimba o payload e resolve o device id.

        Returns:
            (payload carimbado, device id normalizado ou None)
        """
        stamped = stamp_callback(raw, self._clock(), self._local_time_offset_hours)
        return stamped, resolve_device(stamped, query)

    def normalize(self, stamped: dict[str, Any]) -> dict[str, Any]:
        return normalize_message_body(stamped)

    def guard(self, body: dict[str, Any]) -> int | None:
        """Raises StaleMessageError se a mensagem estiver fora da janela."""
        age_ms = check_freshness(body, max_age_ms=self._max_message_age_ms, clock=self._clock)
        if age_ms is not None:
            logger.debug("freshness_checked", extra={"age_ms": age_ms})
        return age_ms

    async def dispatch(
        self,
        *,
        device: str | None,
        device_type: str | None,
        body: dict[str, Any],
        query: dict[str, str],
        root_trace_id: str,
        parent_span: Span | None = None,
    ) -> FanoutResult:
        """Monta o envelope e faz o fan-out.

        Raises:
            EndpointResolutionError: Se o transporte não puder ser preparado.
        """
        await self._transport.prepare()

        envelope = MessageEnvelope(
            device=device or "",
            type=device_type,
            body=body,
            query=query,
            root_trace_id=root_trace_id,
        )
        targets = resolve_queue_targets(device, device_type, self._fanout_mode)
        return await self._dispatcher.dispatch(envelope, targets, parent_span)

    async def compose(self, device: str | None, stamped: dict[str, Any]) -> dict[str, dict[str, Any]]:
        """Resposta de downlink; ack é lido do payload antes da normalização."""
        return await self._composer.compose(device, stamped)
