"""Use cases do callback Sigfox."""

from app.use_cases.sigfox.process_callback import ProcessSigfoxCallbackUseCase

__all__ = ["ProcessSigfoxCallbackUseCase"]
