"""Freshness guard: rejeita mensagens antigas antes do fan-out."""

from __future__ import annotations

import math
import time
from typing import TYPE_CHECKING, Any

from config.settings.sigfox import DEFAULT_MAX_MESSAGE_AGE_MS

from .errors import StaleMessageError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


def _now_ms() -> int:
    return int(time.time() * 1000)


def message_age_ms(base_station_time: int, now_ms: int) -> int:
    """Idade da mensagem em ms a partir do horário da estação base (s)."""
    return now_ms - base_station_time * 1000


def check_freshness(
    body: Mapping[str, Any],
    *,
    max_age_ms: int = DEFAULT_MAX_MESSAGE_AGE_MS,
    clock: Callable[[], int] = _now_ms,
) -> int | None:
    """Valida o frescor do corpo normalizado.

    Exatamente `max_age_ms` ainda é aceito; só `age > max_age_ms` rejeita.
    Sem baseStationTime (ou NaN) não há o que verificar.

    Args:
        body: Corpo normalizado.
        max_age_ms: Idade máxima aceita.
        clock: Relógio em epoch ms (injetável em testes).

    Returns:
        Idade em ms, ou None se a verificação foi pulada.

    Raises:
        StaleMessageError: Se a mensagem for antiga demais.
    """
    base_station_time = body.get("baseStationTime")
    if base_station_time is None:
        return None
    if isinstance(base_station_time, float) and math.isnan(base_station_time):
        return None

    age_ms = message_age_ms(int(base_station_time), clock())
    if age_ms > max_age_ms:
        raise StaleMessageError(age_ms, max_age_ms)
    return age_ms
