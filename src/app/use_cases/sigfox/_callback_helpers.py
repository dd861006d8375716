"""Helpers do callback Sigfox: carimbo de recepção e device id."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

from api.normalizers.sigfox.device import normalize_device_id

_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def stamp_callback(
    raw: dict[str, Any],
    now_ms: int,
    local_time_offset_hours: int = 8,
) -> dict[str, Any]:
    """Acrescenta uuid, datetime, localdatetime e callbackTimestamp.

    Campos do próprio payload prevalecem sobre o carimbo.
    """
    received_at = datetime.fromtimestamp(now_ms / 1000, tz=UTC)
    local_at = received_at + timedelta(hours=local_time_offset_hours)
    stamp: dict[str, Any] = {
        "uuid": str(uuid.uuid4()),
        "datetime": received_at.strftime(_DATETIME_FORMAT),
        "localdatetime": local_at.strftime(_DATETIME_FORMAT),
        "callbackTimestamp": now_ms,
    }
    return {**stamp, **raw}


def resolve_device(body: dict[str, Any], query: dict[str, str]) -> str | None:
    """Device id do corpo (string) ou, na falta, do parâmetro `device` da query."""
    device = body.get("device")
    if isinstance(device, str) and device:
        return normalize_device_id(device)
    fallback = query.get("device")
    if fallback:
        return normalize_device_id(fallback)
    return None
