"""Device shadow em memória — apenas para desenvolvimento e testes."""

from __future__ import annotations

import copy
from typing import Any

from app.infra.shadows._device import require_device_id
from app.protocols.device_shadow import DeviceShadowProtocol


class MemoryDeviceShadow(DeviceShadowProtocol):
    """Estado reportado por dispositivo num dict do processo."""

    def __init__(self) -> None:
        self._states: dict[str, dict[str, Any]] = {}

    async def get_state(self, device_id: str) -> dict[str, Any]:
        key = require_device_id(device_id)
        return copy.deepcopy(self._states.get(key, {}))

    async def set_state(self, device_id: str, state: dict[str, Any]) -> dict[str, Any]:
        key = require_device_id(device_id)
        reported = self._states.setdefault(key, {})
        for field, value in state.items():
            # None remove o campo, como no shadow do IoT Core
            if value is None:
                reported.pop(field, None)
            else:
                reported[field] = value
        return copy.deepcopy(reported)

    async def ensure_device(self, device_id: str) -> None:
        self._states.setdefault(require_device_id(device_id), {})
