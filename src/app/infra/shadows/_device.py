"""Validação de device id comum aos shadows."""

from __future__ import annotations

from api.normalizers.sigfox.device import normalize_device_id
from utils.errors import MissingDeviceIdError


def require_device_id(device_id: str | None) -> str:
    """Normaliza o device id ou falha se ausente.

    Raises:
        MissingDeviceIdError: Se device_id for vazio ou None.
    """
    if not device_id:
        raise MissingDeviceIdError
    return normalize_device_id(device_id)
