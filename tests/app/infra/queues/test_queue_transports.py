"""Testes dos transportes de fila (memory, redis, aws_iot, pubsub)."""

from __future__ import annotations

from concurrent.futures import Future
from unittest.mock import AsyncMock, MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError
from google.api_core.exceptions import NotFound, ServiceUnavailable
from google.auth.exceptions import DefaultCredentialsError
from redis.exceptions import ConnectionError as RedisConnectionError

from app.infra.queues import (
    AwsIotQueueTransport,
    MemoryQueueTransport,
    PubSubQueueTransport,
    RedisQueueTransport,
)
from app.infra.queues import pubsub_queue
from utils.errors import EndpointResolutionError, InfrastructureError, QueuePublishError


class TestAddressFor:
    @pytest.mark.parametrize(
        ("transport", "address"),
        [
            (MemoryQueueTransport(), "sigfox.devices.1A2345"),
            (RedisQueueTransport(AsyncMock()), "sigfox:devices:1A2345"),
            (AwsIotQueueTransport(MagicMock()), "sigfox/devices/1A2345"),
            (PubSubQueueTransport("proj", MagicMock()), "sigfox.devices.1A2345"),
        ],
    )
    def test_separator(self, transport: object, address: str) -> None:
        assert transport.address_for("sigfox.devices.1A2345") == address  # type: ignore[attr-defined]


class TestMemoryQueueTransport:
    @pytest.mark.asyncio
    async def test_records_publishes(self) -> None:
        transport = MemoryQueueTransport()
        await transport.submit("sigfox.received", b"{}")

        assert transport.published == [("sigfox.received", b"{}")]
        transport.clear()
        assert transport.addresses() == []

    @pytest.mark.asyncio
    async def test_failing_address(self) -> None:
        transport = MemoryQueueTransport(failing_addresses=frozenset({"sigfox.received"}))
        with pytest.raises(QueuePublishError) as exc_info:
            await transport.submit("sigfox.received", b"{}")
        assert exc_info.value.address == "sigfox.received"


class TestRedisQueueTransport:
    @pytest.mark.asyncio
    async def test_submit_publishes(self) -> None:
        redis = AsyncMock()
        redis.publish.return_value = 2
        transport = RedisQueueTransport(redis)

        await transport.submit("sigfox:received", b"payload")

        redis.publish.assert_awaited_once_with("sigfox:received", b"payload")

    @pytest.mark.asyncio
    async def test_submit_wraps_redis_error(self) -> None:
        redis = AsyncMock()
        redis.publish.side_effect = RedisConnectionError("connection refused")
        transport = RedisQueueTransport(redis)

        with pytest.raises(QueuePublishError, match="sigfox:received"):
            await transport.submit("sigfox:received", b"payload")

    @pytest.mark.asyncio
    async def test_healthcheck_pings(self) -> None:
        redis = AsyncMock()
        redis.ping.side_effect = RedisConnectionError("down")
        transport = RedisQueueTransport(redis)

        await transport.prepare()
        with pytest.raises(InfrastructureError):
            await transport.healthcheck()

    @pytest.mark.asyncio
    async def test_close(self) -> None:
        redis = AsyncMock()
        await RedisQueueTransport(redis).close()
        redis.aclose.assert_awaited_once()


class TestAwsIotQueueTransport:
    @pytest.mark.asyncio
    async def test_submit_publishes_on_topic(self) -> None:
        client = MagicMock()
        resolver = MagicMock()
        resolver.aget_data_client = AsyncMock(return_value=client)
        transport = AwsIotQueueTransport(resolver)

        await transport.submit("sigfox/received", b"payload")

        client.publish.assert_called_once_with(topic="sigfox/received", qos=1, payload=b"payload")

    @pytest.mark.asyncio
    async def test_prepare_propagates_resolution_error(self) -> None:
        resolver = MagicMock()
        resolver.aget_data_client = AsyncMock(side_effect=EndpointResolutionError("no endpoint"))
        transport = AwsIotQueueTransport(resolver)

        with pytest.raises(EndpointResolutionError):
            await transport.prepare()

    @pytest.mark.asyncio
    async def test_publish_error_is_wrapped(self) -> None:
        client = MagicMock()
        client.publish.side_effect = ClientError(
            {"Error": {"Code": "ThrottlingException", "Message": "slow down"}},
            "Publish",
        )
        resolver = MagicMock()
        resolver.aget_data_client = AsyncMock(return_value=client)

        with pytest.raises(QueuePublishError):
            await AwsIotQueueTransport(resolver, qos=0).submit("sigfox/received", b"{}")

        resolver.invalidate.assert_not_called()

    @pytest.mark.asyncio
    async def test_unreachable_endpoint_invalidates_cached_client(self) -> None:
        client = MagicMock()
        client.publish.side_effect = EndpointConnectionError(endpoint_url="https://iot")
        resolver = MagicMock()
        resolver.aget_data_client = AsyncMock(return_value=client)

        with pytest.raises(QueuePublishError):
            await AwsIotQueueTransport(resolver).submit("sigfox/received", b"{}")

        resolver.invalidate.assert_called_once_with()


def _resolved(result: str | None = None, error: Exception | None = None) -> Future:
    future: Future = Future()
    if error is not None:
        future.set_exception(error)
    else:
        future.set_result(result)
    return future


class TestPubSubQueueTransport:
    @pytest.mark.asyncio
    async def test_submit_publishes_to_topic_path(self) -> None:
        publisher = MagicMock()
        publisher.publish.return_value = _resolved("msg-1")
        transport = PubSubQueueTransport("my-project", publisher)

        await transport.submit("sigfox.devices.all", b'{"device":"1A2345"}')

        publisher.publish.assert_called_once_with(
            "projects/my-project/topics/sigfox.devices.all",
            b'{"device":"1A2345"}',
        )

    @pytest.mark.asyncio
    async def test_missing_topic_is_publish_error(self) -> None:
        publisher = MagicMock()
        publisher.publish.return_value = _resolved(error=NotFound("topic not found"))
        transport = PubSubQueueTransport("my-project", publisher)

        with pytest.raises(QueuePublishError, match="NotFound"):
            await transport.submit("sigfox.devices.NEW", b"{}")

    @pytest.mark.asyncio
    async def test_synchronous_api_error_is_publish_error(self) -> None:
        publisher = MagicMock()
        publisher.publish.side_effect = ServiceUnavailable("backend down")

        with pytest.raises(QueuePublishError, match="ServiceUnavailable"):
            await PubSubQueueTransport("p", publisher).submit("sigfox.received", b"{}")

    @pytest.mark.asyncio
    async def test_prepare_creates_publisher_once(self, monkeypatch: pytest.MonkeyPatch) -> None:
        factory = MagicMock()
        monkeypatch.setattr(pubsub_queue.pubsub_v1, "PublisherClient", factory)
        transport = PubSubQueueTransport("p")

        await transport.prepare()
        await transport.prepare()

        factory.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_credential_failure_is_infrastructure_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        factory = MagicMock(side_effect=DefaultCredentialsError("no adc"))
        monkeypatch.setattr(pubsub_queue.pubsub_v1, "PublisherClient", factory)

        with pytest.raises(InfrastructureError):
            await PubSubQueueTransport("p").prepare()

    @pytest.mark.asyncio
    async def test_close_stops_publisher(self) -> None:
        publisher = MagicMock()
        transport = PubSubQueueTransport("p", publisher)

        await transport.close()

        publisher.stop.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_close_without_publisher_is_noop(self) -> None:
        await PubSubQueueTransport("p").close()
