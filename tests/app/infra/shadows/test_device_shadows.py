"""Testes dos device shadows (memória e AWS IoT)."""

from __future__ import annotations

import io
import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from botocore.exceptions import ClientError

from app.infra.shadows import AwsIotDeviceShadow, MemoryDeviceShadow
from utils.errors import InfrastructureError, MissingDeviceIdError


def _not_found(operation: str) -> ClientError:
    return ClientError({"Error": {"Code": "ResourceNotFoundException", "Message": "x"}}, operation)


def _shadow_payload(reported: dict[str, object]) -> dict[str, object]:
    return {"payload": io.BytesIO(json.dumps({"state": {"reported": reported}}).encode())}


class TestMemoryDeviceShadow:
    @pytest.mark.asyncio
    async def test_set_and_get_share_normalized_id(self) -> None:
        shadow = MemoryDeviceShadow()

        await shadow.set_state("1a2345", {"lat": 1, "lng": 104})

        assert await shadow.get_state("1A2345") == {"lat": 1, "lng": 104}

    @pytest.mark.asyncio
    async def test_none_removes_field(self) -> None:
        shadow = MemoryDeviceShadow()
        await shadow.set_state("1A2345", {"lat": 1, "lng": 104})

        state = await shadow.set_state("1A2345", {"lat": None})

        assert state == {"lng": 104}

    @pytest.mark.asyncio
    async def test_unknown_device_is_empty(self) -> None:
        shadow = MemoryDeviceShadow()
        await shadow.ensure_device("1A2345")
        assert await shadow.get_state("1A2345") == {}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("device_id", ["", None])
    async def test_missing_device_id(self, device_id: str | None) -> None:
        with pytest.raises(MissingDeviceIdError, match="missing_deviceid"):
            await MemoryDeviceShadow().get_state(device_id)  # type: ignore[arg-type]


def _resolver(data_client: MagicMock, control_client: MagicMock | None = None) -> MagicMock:
    resolver = MagicMock()
    resolver.aget_data_client = AsyncMock(return_value=data_client)
    resolver.get_control_client.return_value = control_client or MagicMock()
    return resolver


class TestAwsIotDeviceShadow:
    @pytest.mark.asyncio
    async def test_get_state_reads_reported(self) -> None:
        client = MagicMock()
        client.get_thing_shadow.return_value = _shadow_payload({"seqNumber": 12})

        state = await AwsIotDeviceShadow(_resolver(client)).get_state("1a2345")

        assert state == {"seqNumber": 12}
        client.get_thing_shadow.assert_called_once_with(thingName="1A2345")

    @pytest.mark.asyncio
    async def test_get_state_without_shadow_is_empty(self) -> None:
        client = MagicMock()
        client.get_thing_shadow.side_effect = _not_found("GetThingShadow")

        assert await AwsIotDeviceShadow(_resolver(client)).get_state("1A2345") == {}

    @pytest.mark.asyncio
    async def test_set_state_updates_reported(self) -> None:
        client = MagicMock()
        client.update_thing_shadow.return_value = _shadow_payload({"lat": 1})

        state = await AwsIotDeviceShadow(_resolver(client)).set_state("1A2345", {"lat": 1})

        assert state == {"lat": 1}
        payload = json.loads(client.update_thing_shadow.call_args.kwargs["payload"])
        assert payload == {"state": {"reported": {"lat": 1}}}

    @pytest.mark.asyncio
    async def test_set_state_failure_is_infrastructure_error(self) -> None:
        client = MagicMock()
        client.update_thing_shadow.side_effect = ClientError(
            {"Error": {"Code": "ThrottlingException", "Message": "x"}},
            "UpdateThingShadow",
        )

        with pytest.raises(InfrastructureError):
            await AwsIotDeviceShadow(_resolver(client)).set_state("1A2345", {"lat": 1})

    @pytest.mark.asyncio
    async def test_ensure_device_creates_missing_thing(self) -> None:
        control = MagicMock()
        control.describe_thing.side_effect = _not_found("DescribeThing")
        shadow = AwsIotDeviceShadow(_resolver(MagicMock(), control), thing_type="sigfox")

        await shadow.ensure_device("1a2345")

        control.create_thing.assert_called_once_with(thingName="1A2345", thingTypeName="sigfox")

    @pytest.mark.asyncio
    async def test_ensure_device_existing_thing(self) -> None:
        control = MagicMock()
        shadow = AwsIotDeviceShadow(_resolver(MagicMock(), control))

        await shadow.ensure_device("1A2345")

        control.create_thing.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_device_id(self) -> None:
        with pytest.raises(MissingDeviceIdError):
            await AwsIotDeviceShadow(_resolver(MagicMock())).set_state("", {})
