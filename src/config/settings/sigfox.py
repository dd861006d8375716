"""Settings específicas do callback Sigfox.

Regras de ingestão: janela de frescor, modo de fan-out,
prefixo das filas e payload de downlink padrão.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

FanoutMode = Literal["single", "multi"]

# 5 minutos: mensagens mais antigas são rejeitadas antes do fan-out
DEFAULT_MAX_MESSAGE_AGE_MS: int = 5 * 60 * 1000
DEFAULT_DOWNLINK_DATA: str = "0123456789abcdef"


@dataclass(frozen=True)
class SigfoxSettings:
    """Configurações do callback Sigfox.

    Attributes:
        max_message_age_ms: Idade máxima (ms) aceita para baseStationTime
        fanout_mode: single (fila catch-all) ou multi (all/type/device).
            Vazio = default do backend de filas.
        queue_prefix: Prefixo lógico dos nomes de fila (ex: sigfox)
        downlink_data: Payload de downlink (8 bytes em hex) quando ack=true
        local_time_offset_hours: Deslocamento do campo localdatetime
    """

    max_message_age_ms: int = DEFAULT_MAX_MESSAGE_AGE_MS
    fanout_mode: FanoutMode | None = None
    queue_prefix: str = "sigfox"
    downlink_data: str = DEFAULT_DOWNLINK_DATA
    local_time_offset_hours: int = 8

    def validate(self) -> list[str]:
        """Valida configurações do callback.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.max_message_age_ms <= 0:
            errors.append("SIGFOX_MAX_MESSAGE_AGE_MS deve ser positivo")

        if self.fanout_mode not in (None, "single", "multi"):
            errors.append(f"SIGFOX_FANOUT_MODE inválido: {self.fanout_mode}")

        if not self.queue_prefix:
            errors.append("SIGFOX_QUEUE_PREFIX não pode ser vazio")

        # Formato do downlink é validado de novo a cada resposta
        if len(self.downlink_data) != 16:
            errors.append("SIGFOX_DOWNLINK_DATA deve ter 16 caracteres hex")

        return errors


def _load_sigfox_from_env() -> SigfoxSettings:
    """Carrega SigfoxSettings de variáveis de ambiente."""
    mode_str = os.getenv("SIGFOX_FANOUT_MODE", "").strip().lower()
    fanout_mode: FanoutMode | None = mode_str if mode_str in ("single", "multi") else None

    return SigfoxSettings(
        max_message_age_ms=int(
            os.getenv("SIGFOX_MAX_MESSAGE_AGE_MS", str(DEFAULT_MAX_MESSAGE_AGE_MS))
        ),
        fanout_mode=fanout_mode,
        queue_prefix=os.getenv("SIGFOX_QUEUE_PREFIX", "sigfox"),
        downlink_data=os.getenv("SIGFOX_DOWNLINK_DATA", DEFAULT_DOWNLINK_DATA),
        local_time_offset_hours=int(os.getenv("SIGFOX_LOCAL_TIME_OFFSET_HOURS", "8")),
    )


@lru_cache(maxsize=1)
def get_sigfox_settings() -> SigfoxSettings:
    """Retorna instância cacheada de SigfoxSettings."""
    return _load_sigfox_from_env()
