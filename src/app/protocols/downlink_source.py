"""Protocolo de origem do payload de downlink."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class DownlinkSourceProtocol(ABC):
    """Fornece os 8 bytes (hex) devolvidos ao dispositivo quando ack=true."""

    @abstractmethod
    async def get_downlink_data(self, device: str, body: dict[str, Any]) -> str:
        """Retorna o payload de downlink para o dispositivo.

        Args:
            device: Device id normalizado.
            body: Corpo do callback.

        Returns:
            String hex (validada pelo composer).
        """
