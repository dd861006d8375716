"""Transportes de fila — implementações de QueueTransportProtocol.

Módulos disponíveis:
    - memory_queue: transporte em memória (dev/test)
    - redis_queue: Redis PUBLISH
    - aws_iot_queue: AWS IoT Core MQTT (boto3 iot-data)
    - pubsub_queue: Google Cloud Pub/Sub
"""

from __future__ import annotations

from app.infra.queues.aws_iot_queue import AwsIotQueueTransport
from app.infra.queues.memory_queue import MemoryQueueTransport
from app.infra.queues.pubsub_queue import PubSubQueueTransport
from app.infra.queues.redis_queue import RedisQueueTransport

__all__ = [
    "AwsIotQueueTransport",
    "MemoryQueueTransport",
    "PubSubQueueTransport",
    "RedisQueueTransport",
]
