"""Validação do payload de downlink (8 bytes em hex)."""

from __future__ import annotations

from .errors import InvalidDownlinkPayloadError

DOWNLINK_HEX_LENGTH = 16

_HEX_DIGITS = frozenset("0123456789abcdef")


def validate_downlink_payload(payload: str) -> str:
    """Valida e normaliza o payload de downlink.

    Args:
        payload: Hex em qualquer caixa.

    Returns:
        Payload em minúsculas.

    Raises:
        InvalidDownlinkPayloadError: Tamanho diferente de 16 ou dígito inválido.
    """
    if len(payload) != DOWNLINK_HEX_LENGTH:
        raise InvalidDownlinkPayloadError(f"Result must be 8 bytes: {payload}")

    normalized = payload.lower()
    for digit in normalized:
        if digit not in _HEX_DIGITS:
            raise InvalidDownlinkPayloadError(f"Invalid hex digit in result: {digit}")
    return normalized
