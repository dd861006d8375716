"""Transporte Redis — fan-out via PUBLISH em canais.

Canais seguem o nome lógico com ":" (ex: sigfox:devices:all), a
convenção de namespace do Redis.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from redis.exceptions import RedisError

from app.protocols.queue_transport import QueueTransportProtocol
from utils.errors import InfrastructureError, QueuePublishError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)


class RedisQueueTransport(QueueTransportProtocol):
    """Publica envelopes em canais Redis.

    Args:
        redis_client: Cliente Redis assíncrono.
    """

    name = "redis"
    separator = ":"

    def __init__(self, redis_client: AsyncRedis) -> None:
        self._redis = redis_client

    async def healthcheck(self) -> None:
        try:
            await self._redis.ping()
        except RedisError as exc:
            raise InfrastructureError("redis ping failed") from exc

    async def submit(self, address: str, payload: bytes) -> None:
        try:
            receivers = await self._redis.publish(address, payload)
        except RedisError as exc:
            raise QueuePublishError(address, str(exc)) from exc
        logger.debug("redis_published", extra={"channel": address, "receivers": receivers})

    async def close(self) -> None:
        await self._redis.aclose()
