"""Device shadow no AWS IoT Core (classic shadow de cada thing).

O thing name é o device id normalizado, a mesma regra usada pelo
callback, para que ambos enderecem o mesmo registro.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any

from botocore.exceptions import BotoCoreError, ClientError

from app.infra.shadows._device import require_device_id
from app.protocols.device_shadow import DeviceShadowProtocol
from utils.errors import InfrastructureError

if TYPE_CHECKING:
    from app.infra.aws.iot_endpoint import IotEndpointResolver

logger = logging.getLogger(__name__)

_NOT_FOUND = "ResourceNotFoundException"


def _error_code(exc: ClientError) -> str:
    return exc.response.get("Error", {}).get("Code", "")


class AwsIotDeviceShadow(DeviceShadowProtocol):
    """Lê e atualiza state.reported do shadow via iot-data.

    Args:
        resolver: Resolver memoizado (compartilhado com o transporte).
        thing_type: Thing type usado ao registrar dispositivos novos.
    """

    def __init__(self, resolver: IotEndpointResolver, thing_type: str | None = None) -> None:
        self._resolver = resolver
        self._thing_type = thing_type

    async def get_state(self, device_id: str) -> dict[str, Any]:
        thing_name = require_device_id(device_id)
        client = await self._resolver.aget_data_client()
        try:
            response = await asyncio.to_thread(client.get_thing_shadow, thingName=thing_name)
        except ClientError as exc:
            if _error_code(exc) == _NOT_FOUND:
                return {}
            raise InfrastructureError(f"get_thing_shadow falhou: {thing_name}") from exc
        except BotoCoreError as exc:
            raise InfrastructureError(f"get_thing_shadow falhou: {thing_name}") from exc

        document = json.loads(response["payload"].read())
        return document.get("state", {}).get("reported", {})

    async def set_state(self, device_id: str, state: dict[str, Any]) -> dict[str, Any]:
        thing_name = require_device_id(device_id)
        client = await self._resolver.aget_data_client()
        payload = json.dumps({"state": {"reported": state}})
        try:
            response = await asyncio.to_thread(
                client.update_thing_shadow,
                thingName=thing_name,
                payload=payload,
            )
        except (BotoCoreError, ClientError) as exc:
            raise InfrastructureError(f"update_thing_shadow falhou: {thing_name}") from exc

        document = json.loads(response["payload"].read())
        logger.debug("shadow_updated", extra={"device": thing_name, "fields": len(state)})
        return document.get("state", {}).get("reported", {})

    async def ensure_device(self, device_id: str) -> None:
        thing_name = require_device_id(device_id)
        control = await asyncio.to_thread(self._resolver.get_control_client)
        try:
            await asyncio.to_thread(control.describe_thing, thingName=thing_name)
            return
        except ClientError as exc:
            if _error_code(exc) != _NOT_FOUND:
                raise InfrastructureError(f"describe_thing falhou: {thing_name}") from exc

        kwargs: dict[str, Any] = {"thingName": thing_name}
        if self._thing_type:
            kwargs["thingTypeName"] = self._thing_type
        try:
            await asyncio.to_thread(control.create_thing, **kwargs)
        except (BotoCoreError, ClientError) as exc:
            raise InfrastructureError(f"create_thing falhou: {thing_name}") from exc
        logger.info("device_registered", extra={"device": thing_name})
