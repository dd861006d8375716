"""Erros de validação do callback Sigfox."""

from __future__ import annotations


class SigfoxValidationError(ValueError):
    """Base para rejeições do callback (respondidas com 500)."""

    reason: str = "validation_error"


class StaleMessageError(SigfoxValidationError):
    """baseStationTime mais antigo que a janela de frescor."""

    reason = "stale_message"

    def __init__(self, age_ms: int | float, max_age_ms: int) -> None:
        super().__init__(f"too_old: {age_ms}")
        self.age_ms = age_ms
        self.max_age_ms = max_age_ms


class InvalidDownlinkPayloadError(SigfoxValidationError):
    """Payload de downlink não é 8 bytes em hex."""

    reason = "invalid_downlink"
