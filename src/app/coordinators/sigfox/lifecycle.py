"""Ciclo de vida de uma requisição do callback Sigfox.

received -> normalizing -> guarding -> dispatching -> responding -> terminated

A resposta fica pronta assim que a decisão de downlink existe. O log
final, o fim do span raiz e o flush do tracer voltam como corrotina
separada (trailing) para o adaptador agendar sem segurar o chamador.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from api.validators.sigfox import SigfoxValidationError
from app.coordinators.sigfox.invocation import CallbackInvocation, CallbackResponse, CallbackState
from app.observability import (
    bind_root_trace_id,
    end_task,
    generate_root_trace_id,
    record_latency,
    record_rejection,
    reset_root_trace_id,
    start_root_span,
    trace_id_of,
)
from utils.errors import InfrastructureError

if TYPE_CHECKING:
    from collections.abc import Coroutine

    from app.use_cases.sigfox import ProcessSigfoxCallbackUseCase

logger = logging.getLogger(__name__)

ROOT_SPAN_NAME = "sigfox_callback"


@dataclass(frozen=True, slots=True)
class LifecycleOutcome:
    """Resposta pronta e o trabalho de encerramento ainda pendente."""

    response: CallbackResponse
    invocation: CallbackInvocation
    trailing: Coroutine[Any, Any, None]


class SigfoxCallbackLifecycle:
    """Conduz uma invocação do callback do início ao fim."""

    def __init__(self, use_case: ProcessSigfoxCallbackUseCase) -> None:
        self._use_case = use_case

    async def handle(self, raw: dict[str, Any], query: dict[str, str]) -> LifecycleOutcome:
        """Processa o callback e devolve a resposta.

        Nunca levanta exceção: erros antes da resposta viram 500.

        Args:
            raw: Corpo JSON do callback (valores string).
            query: Parâmetros de query (`type`, `device`).
        """
        root_span = start_root_span(ROOT_SPAN_NAME)
        root_trace_id = trace_id_of(root_span) or generate_root_trace_id()
        root_span.set_attribute("root_trace_id", root_trace_id)
        token = bind_root_trace_id(root_trace_id)
        invocation = CallbackInvocation(
            root_trace_id=root_trace_id,
            root_span=root_span,
            device_type=query.get("type") or None,
        )
        try:
            response = await self._run(invocation, raw, query)
        except SigfoxValidationError as exc:
            record_rejection(exc.reason)
            logger.warning(
                "callback_rejected",
                extra={
                    "reason": exc.reason,
                    "state": invocation.state.value,
                    "error": str(exc),
                },
            )
            response = invocation.done(error=exc)
        except InfrastructureError as exc:
            logger.error(
                "callback_infrastructure_failed",
                extra={
                    "state": invocation.state.value,
                    "error": str(exc),
                    "error_type": type(exc).__name__,
                },
            )
            response = invocation.done(error=exc)
        except Exception as exc:
            logger.exception(
                "callback_failed",
                extra={"state": invocation.state.value, "error_type": type(exc).__name__},
            )
            response = invocation.done(error=exc)
        finally:
            reset_root_trace_id(token)

        return LifecycleOutcome(
            response=response,
            invocation=invocation,
            trailing=self._finish(invocation),
        )

    async def _run(
        self,
        invocation: CallbackInvocation,
        raw: dict[str, Any],
        query: dict[str, str],
    ) -> CallbackResponse:
        stamped, invocation.device = self._use_case.stamp(raw, query)
        logger.info(
            "callback_received",
            extra={"device": invocation.device, "type": invocation.device_type},
        )

        invocation.advance(CallbackState.NORMALIZING)
        body = self._use_case.normalize(stamped)

        invocation.advance(CallbackState.GUARDING)
        self._use_case.guard(body)

        invocation.advance(CallbackState.DISPATCHING)
        invocation.fanout = await self._use_case.dispatch(
            device=invocation.device,
            device_type=invocation.device_type,
            body=body,
            query=query,
            root_trace_id=invocation.root_trace_id,
            parent_span=invocation.root_span,
        )

        invocation.advance(CallbackState.RESPONDING)
        downlink = await self._use_case.compose(invocation.device, stamped)
        return invocation.respond_downlink(downlink)

    async def _finish(self, invocation: CallbackInvocation) -> None:
        """Log final, fim do span raiz e flush do tracer."""
        token = bind_root_trace_id(invocation.root_trace_id)
        try:
            await self._close(invocation)
        finally:
            reset_root_trace_id(token)

    async def _close(self, invocation: CallbackInvocation) -> None:
        fanout = invocation.fanout
        status_code = invocation.response.status_code if invocation.response else None
        logger.info(
            "callback_result",
            extra={
                "correlation_id": invocation.root_trace_id,
                "device": invocation.device,
                "status_code": status_code,
                "is_dispatched": bool(fanout and fanout.envelope.is_dispatched),
                "targets": len(fanout.outcomes) if fanout else 0,
                "failed": fanout.failed if fanout else 0,
            },
        )
        record_latency(
            "lifecycle",
            "invoke",
            invocation.elapsed_ms,
            correlation_id=invocation.root_trace_id,
        )
        if invocation.root_span is not None:
            invocation.root_span.set_attribute("http.status_code", status_code or 0)
        await asyncio.to_thread(end_task, invocation.root_span)
