"""Normalização do corpo do callback Sigfox.

O operador entrega todos os campos como string:

    {"device": "1CB0B8", "data": "81543795", "time": "1476980426",
     "duplicate": "false", "snr": "18.86", "station": "1D44",
     "avgSnr": "15.54", "lat": "1", "lng": "104", "rssi": "-123.00",
     "seqNumber": "1492", "ack": "false", "longPolling": "false"}

Campos ausentes ou vazios não são tocados. Números malformados viram
NaN em vez de erro: quem consome o corpo decide o que fazer com eles.
"""

from __future__ import annotations

import math
import re
from typing import Any

BOOL_FIELDS = ("duplicate", "ack", "longPolling")
FLOAT_FIELDS = ("snr", "avgSnr", "rssi")
INT_FIELDS = ("lat", "lng", "seqNumber")

# Prefixo numérico aceito, como o parse lenient do operador (ex: "12abc" -> 12)
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_js_int(value: Any) -> int | float:
    """Converte para inteiro base 10 pelo prefixo numérico.

    Returns:
        Inteiro, ou math.nan se não houver dígitos no início.
    """
    match = _INT_PREFIX.match(str(value))
    if match is None:
        return math.nan
    return int(match.group(1))


def parse_js_float(value: Any) -> float:
    """Converte para float pelo prefixo numérico (math.nan se inválido)."""
    text = str(value).strip()
    if text.lstrip("+-") == "Infinity":
        return -math.inf if text.startswith("-") else math.inf
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return math.nan
    return float(match.group(1))


def _parse_bool(value: Any) -> bool:
    return value == "true"


def _format_timestamp_ms(base_station_time: int | float) -> str:
    if isinstance(base_station_time, float) and math.isnan(base_station_time):
        return "NaN"
    return str(base_station_time * 1000)


def normalize_message_body(raw: dict[str, Any]) -> dict[str, Any]:
    """Produz o corpo normalizado sem alterar o dict de entrada.

    Args:
        raw: Corpo do callback (valores string, plano).

    Returns:
        Cópia com tipos nativos; nunca contém a chave `time`.
    """
    body = dict(raw)

    # `time` é reservado no armazenamento de séries temporais
    raw_time = body.pop("time", None)
    if raw_time:
        base_station_time = parse_js_int(raw_time)
        body["timestamp"] = _format_timestamp_ms(base_station_time)
        body["baseStationTime"] = base_station_time

    for field in BOOL_FIELDS:
        if body.get(field):
            body[field] = _parse_bool(body[field])

    for field in FLOAT_FIELDS:
        if body.get(field):
            body[field] = parse_js_float(body[field])

    for field in INT_FIELDS:
        if body.get(field):
            body[field] = parse_js_int(body[field])

    return body
