"""Transporte Google Cloud Pub/Sub via google-cloud-pubsub.

Ids de tópico aceitam ".", então o nome lógico é usado como está
(ex: projects/<project>/topics/sigfox.devices.all). O tópico por device
pode não existir; a falha fica isolada naquele destino.

O PublisherClient respeita PUBSUB_EMULATOR_HOST sozinho (sem
autenticação contra o emulador).
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import pubsub_v1

from app.protocols.queue_transport import QueueTransportProtocol
from utils.errors import InfrastructureError, QueuePublishError

logger = logging.getLogger(__name__)


class PubSubQueueTransport(QueueTransportProtocol):
    """Publica envelopes em tópicos Pub/Sub.

    Args:
        project_id: Projeto GCP dos tópicos.
        publisher: PublisherClient já criado (testes); senão é criado no
            primeiro uso com as credenciais padrão do ambiente.
    """

    name = "pubsub"
    separator = "."

    def __init__(self, project_id: str, publisher: Any = None) -> None:
        self._project_id = project_id
        self._publisher = publisher
        self._lock = threading.Lock()

    def topic_path(self, address: str) -> str:
        return f"projects/{self._project_id}/topics/{address}"

    def _get_publisher(self) -> Any:
        with self._lock:
            if self._publisher is None:
                try:
                    self._publisher = pubsub_v1.PublisherClient()
                except GoogleAuthError as exc:
                    raise InfrastructureError("credenciais GCP indisponíveis") from exc
                logger.info("pubsub_publisher_created", extra={"project_id": self._project_id})
            return self._publisher

    async def prepare(self) -> None:
        await asyncio.to_thread(self._get_publisher)

    async def submit(self, address: str, payload: bytes) -> None:
        publisher = await asyncio.to_thread(self._get_publisher)
        try:
            future = publisher.publish(self.topic_path(address), payload)
            message_id = await asyncio.wrap_future(future)
        except GoogleAPIError as exc:
            raise QueuePublishError(address, type(exc).__name__) from exc

        logger.debug("pubsub_published", extra={"topic": address, "message_id": message_id})

    async def close(self) -> None:
        if self._publisher is not None:
            await asyncio.to_thread(self._publisher.stop)
