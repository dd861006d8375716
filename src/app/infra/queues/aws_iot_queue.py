"""Transporte AWS IoT Core — publicação MQTT via boto3 iot-data.

Tópicos MQTT usam "/" como separador (ex: sigfox/received). O cliente
iot-data vem do IotEndpointResolver compartilhado pelo processo; se o
endpoint memoizado deixa de responder, o cache é descartado e a próxima
invocação resolve de novo.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from botocore.exceptions import BotoCoreError, ClientError, EndpointConnectionError

from app.protocols.queue_transport import QueueTransportProtocol
from utils.errors import QueuePublishError

if TYPE_CHECKING:
    from app.infra.aws.iot_endpoint import IotEndpointResolver

logger = logging.getLogger(__name__)


class AwsIotQueueTransport(QueueTransportProtocol):
    """Publica envelopes em tópicos MQTT do AWS IoT.

    Args:
        resolver: Resolver memoizado do endpoint de dados.
        qos: QoS MQTT (0 ou 1).
    """

    name = "aws_iot"
    separator = "/"

    def __init__(self, resolver: IotEndpointResolver, qos: int = 1) -> None:
        self._resolver = resolver
        self._qos = qos

    async def prepare(self) -> None:
        """Resolve o endpoint (EndpointResolutionError é fatal)."""
        await self._resolver.aget_data_client()

    async def submit(self, address: str, payload: bytes) -> None:
        client = await self._resolver.aget_data_client()
        try:
            await asyncio.to_thread(client.publish, topic=address, qos=self._qos, payload=payload)
        except EndpointConnectionError as exc:
            self._resolver.invalidate()
            logger.warning("iot_endpoint_unreachable", extra={"topic": address})
            raise QueuePublishError(address, str(exc)) from exc
        except (BotoCoreError, ClientError) as exc:
            raise QueuePublishError(address, str(exc)) from exc
