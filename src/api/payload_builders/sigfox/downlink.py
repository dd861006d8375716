"""Builder da resposta de downlink devolvida à rede Sigfox.

Formato (uma única entrada, chaveada pelo device id):
    {"1A2345": {"noData": true}}
    {"1A2345": {"downlinkData": "0123456789abcdef"}}
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.normalizers.sigfox.device import MISSING_DEVICE
from api.validators.sigfox.downlink import validate_downlink_payload

if TYPE_CHECKING:
    from app.protocols.downlink_source import DownlinkSourceProtocol


def wants_no_downlink(body: dict[str, Any]) -> bool:
    """True se o dispositivo não pediu downlink (ack false, bool ou string)."""
    ack = body.get("ack")
    return ack is False or ack == "false"


def compose_no_data_response(device: str | None) -> dict[str, dict[str, Any]]:
    """Resposta sem downlink."""
    return {device or MISSING_DEVICE: {"noData": True}}


class DownlinkResponseComposer:
    """Decide entre noData e downlinkData para o callback."""

    def __init__(self, *, source: DownlinkSourceProtocol) -> None:
        self._source = source

    async def compose(self, device: str | None, body: dict[str, Any]) -> dict[str, dict[str, Any]]:
        """Constrói a resposta de downlink.

        Args:
            device: Device id normalizado (None se ausente).
            body: Corpo do callback antes da normalização (ack como string).

        Returns:
            Mapeamento com exatamente uma entrada.

        Raises:
            InvalidDownlinkPayloadError: Se a origem devolver payload inválido.
        """
        if wants_no_downlink(body):
            return compose_no_data_response(device)

        key = device or MISSING_DEVICE
        payload = await self._source.get_downlink_data(key, body)
        return {key: {"downlinkData": validate_downlink_payload(payload)}}
