"""Estado de uma invocação do callback.

Cada requisição ganha um CallbackInvocation novo; a resposta é
produzida exatamente uma vez.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from opentelemetry.trace import Span

    from app.services.fanout_dispatcher import FanoutResult


class CallbackState(str, Enum):
    """Estados do ciclo de vida, em ordem."""

    RECEIVED = "received"
    NORMALIZING = "normalizing"
    GUARDING = "guarding"
    DISPATCHING = "dispatching"
    RESPONDING = "responding"
    TERMINATED = "terminated"


_ORDER = list(CallbackState)


class ResponseAlreadySentError(RuntimeError):
    """Segunda tentativa de responder a mesma invocação."""


class InvalidStateTransitionError(RuntimeError):
    """Transição para trás ou a partir de TERMINATED."""


@dataclass(frozen=True, slots=True)
class CallbackResponse:
    """Resposta HTTP final (corpo JSON ou texto puro)."""

    status_code: int
    body: Any
    media_type: str = "application/json"

    @property
    def is_json(self) -> bool:
        return self.media_type == "application/json"


@dataclass(slots=True)
class CallbackInvocation:
    """Contexto mutável de uma única requisição."""

    root_trace_id: str
    root_span: Span | None = None
    state: CallbackState = CallbackState.RECEIVED
    device: str | None = None
    device_type: str | None = None
    fanout: FanoutResult | None = None
    error: BaseException | None = None
    started_at: float = field(default_factory=time.perf_counter)
    _response: CallbackResponse | None = None

    @property
    def response(self) -> CallbackResponse | None:
        return self._response

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started_at) * 1000

    def advance(self, state: CallbackState) -> None:
        """Avança o estado; só para frente.

        Raises:
            InvalidStateTransitionError: Se voltar ou sair de TERMINATED.
        """
        if self.state is CallbackState.TERMINATED or _ORDER.index(state) <= _ORDER.index(self.state):
            msg = f"transição inválida: {self.state.value} -> {state.value}"
            raise InvalidStateTransitionError(msg)
        self.state = state

    def respond(self, status_code: int, body: Any, media_type: str = "application/json") -> CallbackResponse:
        """Fixa a resposta e termina a invocação.

        Raises:
            ResponseAlreadySentError: Se já houver resposta.
        """
        if self._response is not None:
            msg = f"resposta já enviada ({self._response.status_code})"
            raise ResponseAlreadySentError(msg)
        self._response = CallbackResponse(status_code=status_code, body=body, media_type=media_type)
        self.state = CallbackState.TERMINATED
        return self._response

    def respond_downlink(self, downlink: dict[str, Any]) -> CallbackResponse:
        """204 com o JSON de downlink (a rede Sigfox exige 204)."""
        return self.respond(204, downlink)

    def done(self, error: BaseException | None = None, result: Any = None) -> CallbackResponse:
        """Resposta genérica: 500 texto puro se houve erro, senão 200 JSON."""
        if error is not None:
            self.error = error
            return self.respond(500, str(error) or type(error).__name__, media_type="text/plain")
        return self.respond(200, result)
