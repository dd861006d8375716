"""Coordenação do callback Sigfox (ciclo de vida da requisição)."""

from app.coordinators.sigfox.invocation import (
    CallbackInvocation,
    CallbackResponse,
    CallbackState,
    ResponseAlreadySentError,
)
from app.coordinators.sigfox.lifecycle import LifecycleOutcome, SigfoxCallbackLifecycle

__all__ = [
    "CallbackInvocation",
    "CallbackResponse",
    "CallbackState",
    "LifecycleOutcome",
    "ResponseAlreadySentError",
    "SigfoxCallbackLifecycle",
]
