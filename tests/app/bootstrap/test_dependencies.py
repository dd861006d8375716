"""Testes do wiring do bootstrap (transporte, shadow e lifecycle)."""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.bootstrap import dependencies, get_device_shadow, validate_runtime_settings
from app.infra.queues import (
    AwsIotQueueTransport,
    MemoryQueueTransport,
    PubSubQueueTransport,
    RedisQueueTransport,
)
from app.infra.shadows import AwsIotDeviceShadow, MemoryDeviceShadow
from config.settings import QueueSettings, SigfoxSettings


@pytest.fixture
def fake_clients(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dependencies, "create_async_redis_client", lambda: AsyncMock())
    monkeypatch.setattr(dependencies, "get_iot_endpoint_resolver", lambda: MagicMock())


@pytest.mark.usefixtures("fake_clients")
class TestCreateQueueTransport:
    @pytest.mark.parametrize(
        ("settings", "expected"),
        [
            (QueueSettings(backend="memory"), MemoryQueueTransport),
            (QueueSettings(backend="redis", redis_url="redis://localhost"), RedisQueueTransport),
            (QueueSettings(backend="aws_iot", aws_region="eu-west-1"), AwsIotQueueTransport),
            (QueueSettings(backend="pubsub", pubsub_project_id="p"), PubSubQueueTransport),
        ],
    )
    def test_backend_selection(self, settings: QueueSettings, expected: type) -> None:
        assert isinstance(dependencies.create_queue_transport(settings), expected)

    def test_unknown_backend(self) -> None:
        with pytest.raises(ValueError, match="QUEUE_BACKEND inválido"):
            dependencies.create_queue_transport(QueueSettings(backend="kafka"))  # type: ignore[arg-type]

    def test_device_shadow_follows_backend(self) -> None:
        assert isinstance(
            dependencies.create_device_shadow(QueueSettings(backend="aws_iot", aws_region="x")),
            AwsIotDeviceShadow,
        )
        assert isinstance(
            dependencies.create_device_shadow(QueueSettings(backend="redis")),
            MemoryDeviceShadow,
        )

    @pytest.mark.usefixtures("clear_settings_cache")
    def test_memory_backend_outside_development_warns(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "staging")

        with caplog.at_level(logging.WARNING):
            dependencies.create_queue_transport(QueueSettings(backend="memory"))

        assert any(
            record.getMessage() == "memory_queue_in_non_dev" for record in caplog.records
        )


class TestCreateCallbackLifecycle:
    @pytest.mark.asyncio
    async def test_aws_iot_backend_defaults_to_single_queue(self) -> None:
        transport = MemoryQueueTransport()
        lifecycle = dependencies.create_callback_lifecycle(
            transport,
            SigfoxSettings(),
            QueueSettings(backend="aws_iot", aws_region="eu-west-1"),
        )

        outcome = await lifecycle.handle({"device": "1A2345", "ack": "false"}, {"type": "gps"})
        await outcome.trailing

        assert transport.addresses() == ["sigfox.received"]

    @pytest.mark.asyncio
    async def test_explicit_mode_and_prefix(self) -> None:
        transport = MemoryQueueTransport()
        lifecycle = dependencies.create_callback_lifecycle(
            transport,
            SigfoxSettings(fanout_mode="multi", queue_prefix="telemetry"),
            QueueSettings(backend="aws_iot", aws_region="eu-west-1"),
        )

        outcome = await lifecycle.handle({"device": "1A2345", "ack": "false"}, {})
        await outcome.trailing

        assert transport.addresses() == ["telemetry.devices.all", "telemetry.devices.1A2345"]

    @pytest.mark.asyncio
    async def test_configured_downlink_data(self) -> None:
        lifecycle = dependencies.create_callback_lifecycle(
            MemoryQueueTransport(),
            SigfoxSettings(downlink_data="FFFFFFFFFFFFFFFF"),
            QueueSettings(),
        )

        outcome = await lifecycle.handle({"device": "1A2345", "ack": "true"}, {})
        await outcome.trailing

        assert outcome.response.body == {"1A2345": {"downlinkData": "ffffffffffffffff"}}


@pytest.mark.usefixtures("clear_settings_cache")
class TestValidateRuntimeSettings:
    def test_production_with_memory_backend_fails_fast(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("QUEUE_BACKEND", "memory")

        with pytest.raises(RuntimeError, match="QUEUE_BACKEND=memory"):
            validate_runtime_settings()

    def test_development_only_warns(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "development")
        monkeypatch.setenv("QUEUE_BACKEND", "redis")
        monkeypatch.delenv("REDIS_URL", raising=False)

        validate_runtime_settings()


@pytest.mark.usefixtures("clear_settings_cache")
class TestProcessGetters:
    def test_device_shadow_is_process_singleton(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("QUEUE_BACKEND", "memory")
        get_device_shadow.cache_clear()
        try:
            shadow = get_device_shadow()

            assert isinstance(shadow, MemoryDeviceShadow)
            assert get_device_shadow() is shadow
        finally:
            get_device_shadow.cache_clear()
