"""Normalização de device id.

Ids longos (hex da rede Sigfox) são usados como vieram; nomes curtos
amigáveis são convertidos para maiúsculas. A mesma regra endereça o
registro do dispositivo no device shadow.
"""

from __future__ import annotations

# Chave da resposta de downlink quando o callback não traz device id
MISSING_DEVICE = "missing_device"

_SHORT_ID_MAX_LENGTH = 6


def normalize_device_id(device_id: str) -> str:
    """Normaliza device id (idempotente).

    Args:
        device_id: Id como recebido (body ou query).

    Returns:
        O próprio id se tiver mais de 6 caracteres, senão em maiúsculas.
    """
    if len(device_id) > _SHORT_ID_MAX_LENGTH:
        return device_id
    return device_id.upper()
