"""Factories de dependências — transporte de filas, shadow e lifecycle.

Centraliza a escolha das implementações concretas conforme as settings.
O transporte é escolhido uma vez por processo, nunca por mensagem.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.payload_builders.sigfox import DownlinkResponseComposer
from app.bootstrap.clients import (
    create_async_redis_client,
    get_iot_endpoint_resolver,
)
from app.coordinators.sigfox import SigfoxCallbackLifecycle
from app.infra.queues import (
    AwsIotQueueTransport,
    MemoryQueueTransport,
    PubSubQueueTransport,
    RedisQueueTransport,
)
from app.infra.shadows import AwsIotDeviceShadow, MemoryDeviceShadow
from app.services import (
    FanoutDispatcher,
    StaticDownlinkSource,
    default_fanout_mode,
)
from app.use_cases.sigfox import ProcessSigfoxCallbackUseCase
from config.settings import get_base_settings, get_queue_settings, get_sigfox_settings

if TYPE_CHECKING:
    from app.protocols.device_shadow import DeviceShadowProtocol
    from app.protocols.queue_transport import QueueTransportProtocol
    from config.settings import QueueSettings, SigfoxSettings

logger = logging.getLogger(__name__)


def _warn_memory_in_non_dev(component: str) -> None:
    environment = get_base_settings().environment
    if environment != "development":
        logger.warning(
            f"memory_{component}_in_non_dev",
            extra={"backend": "memory", "environment": environment},
        )


def create_queue_transport(settings: QueueSettings | None = None) -> QueueTransportProtocol:
    """Cria o transporte de filas conforme QUEUE_BACKEND.

    - "memory": MemoryQueueTransport (dev/test)
    - "redis": RedisQueueTransport (PUBLISH)
    - "aws_iot": AwsIotQueueTransport (MQTT via iot-data)
    - "pubsub": PubSubQueueTransport (Google Cloud Pub/Sub)
    """
    settings = settings or get_queue_settings()
    backend = settings.backend

    if backend == "redis":
        transport: QueueTransportProtocol = RedisQueueTransport(create_async_redis_client())
    elif backend == "aws_iot":
        transport = AwsIotQueueTransport(get_iot_endpoint_resolver())
    elif backend == "pubsub":
        transport = PubSubQueueTransport(settings.pubsub_project_id)
    elif backend == "memory":
        _warn_memory_in_non_dev("queue")
        transport = MemoryQueueTransport()
    else:
        msg = f"QUEUE_BACKEND inválido: {backend}"
        raise ValueError(msg)

    logger.info("queue_transport_created", extra={"backend": transport.name})
    return transport


def create_device_shadow(settings: QueueSettings | None = None) -> DeviceShadowProtocol:
    """Cria o device shadow: AWS IoT quando o backend é aws_iot, senão memória."""
    settings = settings or get_queue_settings()
    if settings.backend == "aws_iot":
        shadow: DeviceShadowProtocol = AwsIotDeviceShadow(get_iot_endpoint_resolver())
        logger.info("device_shadow_created", extra={"backend": "aws_iot"})
        return shadow

    _warn_memory_in_non_dev("shadow")
    logger.info("device_shadow_created", extra={"backend": "memory"})
    return MemoryDeviceShadow()


def create_callback_lifecycle(
    transport: QueueTransportProtocol,
    sigfox_settings: SigfoxSettings | None = None,
    queue_settings: QueueSettings | None = None,
) -> SigfoxCallbackLifecycle:
    """Monta lifecycle, use case, dispatcher e composer do callback."""
    sigfox_settings = sigfox_settings or get_sigfox_settings()
    queue_settings = queue_settings or get_queue_settings()
    fanout_mode = sigfox_settings.fanout_mode or default_fanout_mode(queue_settings.backend)

    use_case = ProcessSigfoxCallbackUseCase(
        transport=transport,
        dispatcher=FanoutDispatcher(
            transport=transport,
            queue_prefix=sigfox_settings.queue_prefix,
        ),
        composer=DownlinkResponseComposer(
            source=StaticDownlinkSource(sigfox_settings.downlink_data),
        ),
        fanout_mode=fanout_mode,
        max_message_age_ms=sigfox_settings.max_message_age_ms,
        local_time_offset_hours=sigfox_settings.local_time_offset_hours,
    )
    logger.info(
        "callback_lifecycle_created",
        extra={"backend": transport.name, "fanout_mode": fanout_mode},
    )
    return SigfoxCallbackLifecycle(use_case)
