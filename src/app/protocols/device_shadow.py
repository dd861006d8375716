"""Protocolo do device shadow (estado persistente por dispositivo).

Consumido pelos processadores downstream; o callback não o chama.
Device ids passam pela mesma normalização do callback.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class DeviceShadowProtocol(ABC):
    """Contrato do store de estado por dispositivo."""

    @abstractmethod
    async def get_state(self, device_id: str) -> dict[str, Any]:
        """Retorna o estado reportado do dispositivo.

        Raises:
            MissingDeviceIdError: Se device_id vazio.
        """

    @abstractmethod
    async def set_state(self, device_id: str, state: dict[str, Any]) -> dict[str, Any]:
        """Mescla estado parcial no estado reportado.

        Returns:
            Estado aceito pela atualização.

        Raises:
            MissingDeviceIdError: Se device_id vazio.
        """

    @abstractmethod
    async def ensure_device(self, device_id: str) -> None:
        """Registra o dispositivo se ainda não existir."""
