"""Origens de payload de downlink."""

from __future__ import annotations

from typing import Any

from app.protocols.downlink_source import DownlinkSourceProtocol


class StaticDownlinkSource(DownlinkSourceProtocol):
    """Devolve o mesmo payload configurado para todos os dispositivos."""

    def __init__(self, downlink_data: str) -> None:
        self._downlink_data = downlink_data

    async def get_downlink_data(self, device: str, body: dict[str, Any]) -> str:
        return self._downlink_data
