"""Fan-out do envelope Sigfox para as filas resolvidas.

Todas as publicações partem juntas e o dispatcher espera todas
terminarem (join). Falha num destino é logada e vira um
PublishOutcome(ok=False); nunca cancela nem aborta os demais.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from opentelemetry import trace

from app.domain.envelope import PublishOutcome
from app.observability import (
    get_root_trace_id,
    get_tracer,
    record_fanout,
    record_latency,
    scalar_attributes,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.envelope import MessageEnvelope, QueueTarget
    from app.protocols.queue_transport import QueueTransportProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FanoutResult:
    """Envelope marcado como despachado e o resultado de cada destino."""

    envelope: MessageEnvelope
    outcomes: tuple[PublishOutcome, ...]

    @property
    def failed(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.ok)


class FanoutDispatcher:
    """Publica o envelope em cada destino com isolamento de falhas."""

    def __init__(
        self,
        *,
        transport: QueueTransportProtocol,
        queue_prefix: str = "sigfox",
    ) -> None:
        self._transport = transport
        self._queue_prefix = queue_prefix

    async def dispatch(
        self,
        envelope: MessageEnvelope,
        targets: Sequence[QueueTarget],
        parent_span: trace.Span | None = None,
    ) -> FanoutResult:
        """Publica em todos os destinos e aguarda todos terminarem.

        Args:
            envelope: Envelope da invocação (não é alterado).
            targets: Destinos resolvidos.
            parent_span: Span raiz da invocação, pai dos spans de publish.

        Returns:
            FanoutResult com a cópia do envelope (is_dispatched=True),
            independente de quantos destinos falharam.
        """
        started = time.perf_counter()
        payload = envelope.to_wire()

        outcomes = await asyncio.gather(
            *(self._publish(envelope, payload, target, parent_span) for target in targets)
        )
        result = FanoutResult(envelope=envelope.mark_dispatched(), outcomes=tuple(outcomes))

        logger.info(
            "fanout_completed",
            extra={
                "device": envelope.device,
                "targets": len(result.outcomes),
                "failed": result.failed,
                "backend": self._transport.name,
            },
        )
        record_fanout(self._transport.name, len(result.outcomes), result.failed)
        record_latency("fanout", "dispatch", (time.perf_counter() - started) * 1000)
        return result

    async def _publish(
        self,
        envelope: MessageEnvelope,
        payload: bytes,
        target: QueueTarget,
        parent_span: trace.Span | None,
    ) -> PublishOutcome:
        address = self._transport.address_for(target.topic_name(self._queue_prefix))
        context = trace.set_span_in_context(parent_span) if parent_span is not None else None

        with get_tracer().start_as_current_span(
            "queue_publish",
            context=context,
            attributes=scalar_attributes(envelope.body),
        ) as span:
            span.set_attribute("messaging.destination", address)
            span.set_attribute("root_trace_id", envelope.root_trace_id or get_root_trace_id())
            try:
                await self._transport.submit(address, payload)
            except Exception as exc:
                span.record_exception(exc)
                logger.warning(
                    "fanout_publish_failed",
                    extra={
                        "device": envelope.device,
                        "target_kind": target.kind,
                        "address": address,
                        "error": str(exc),
                        "error_type": type(exc).__name__,
                    },
                )
                return PublishOutcome(target=target, address=address, ok=False, error=str(exc))

        logger.debug("fanout_published", extra={"address": address, "target_kind": target.kind})
        return PublishOutcome(target=target, address=address, ok=True)
