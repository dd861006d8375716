"""Normalizer Sigfox: payload do callback para tipos nativos.

Responsabilidades:
- Converter campos string do callback em bool/int/float
- Substituir `time` por `baseStationTime` + `timestamp`
- Normalizar o device id (regra compartilhada com o device shadow)
"""

from .device import MISSING_DEVICE, normalize_device_id
from .normalizer import normalize_message_body, parse_js_float, parse_js_int

__all__ = [
    "MISSING_DEVICE",
    "normalize_device_id",
    "normalize_message_body",
    "parse_js_float",
    "parse_js_int",
]
