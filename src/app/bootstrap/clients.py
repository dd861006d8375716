"""Factories de clientes externos — Redis e AWS IoT.

Clientes são singletons de processo; nenhum é criado por mensagem. O
PublisherClient do Pub/Sub é criado pelo próprio transporte no prepare().
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from app.infra.aws.iot_endpoint import IotEndpointResolver
from config.settings import get_queue_settings

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# Redis Client Factory
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def create_async_redis_client() -> AsyncRedis:
    """Cria cliente Redis assíncrono (singleton).

    Raises:
        ValueError: Se REDIS_URL não configurado
    """
    from redis.asyncio import Redis as AsyncRedis

    redis_url = get_queue_settings().redis_url
    if not redis_url:
        msg = "REDIS_URL não configurado"
        raise ValueError(msg)

    client: AsyncRedis = AsyncRedis.from_url(
        redis_url,
        decode_responses=False,
        socket_timeout=5.0,
        socket_connect_timeout=5.0,
    )

    host = client.connection_pool.connection_kwargs.get("host", "unknown")
    logger.info("async_redis_client_created", extra={"host": host})
    return client


# ──────────────────────────────────────────────────────────────────────────────
# AWS IoT Endpoint Resolver
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_iot_endpoint_resolver() -> IotEndpointResolver:
    """Resolver do endpoint iot-data compartilhado (transporte e shadow).

    Raises:
        ValueError: Se AWS_REGION não configurado
    """
    settings = get_queue_settings()
    if not settings.aws_region:
        msg = "AWS_REGION não configurado"
        raise ValueError(msg)

    resolver = IotEndpointResolver(
        region=settings.aws_region,
        endpoint_type=settings.iot_endpoint_type,
    )
    logger.info(
        "iot_endpoint_resolver_created",
        extra={"region": settings.aws_region, "endpoint_type": settings.iot_endpoint_type},
    )
    return resolver
