"""Resolução memoizada do endpoint de dados do AWS IoT Core.

O endpoint do plano de dados é por conta/região e só é conhecido via
iot:DescribeEndpoint. O cliente iot-data resultante é compartilhado por
todas as invocações do processo; uma falha de resolução deixa o cache
vazio para que a próxima chamada tente de novo.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import TYPE_CHECKING, Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from utils.errors import EndpointResolutionError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT_TYPE = "iot:Data-ATS"


class IotEndpointResolver:
    """Cache process-wide dos clientes iot (controle) e iot-data.

    Args:
        region: Região AWS.
        endpoint_type: Tipo pedido ao describe_endpoint.
        client_factory: Fábrica de clientes boto3 (injetável em testes).
    """

    def __init__(
        self,
        *,
        region: str,
        endpoint_type: str = DEFAULT_ENDPOINT_TYPE,
        client_factory: Callable[..., Any] = boto3.client,
    ) -> None:
        self._region = region
        self._endpoint_type = endpoint_type
        self._client_factory = client_factory
        self._lock = threading.Lock()
        self._control_client: Any = None
        self._data_client: Any = None

    @property
    def resolved(self) -> bool:
        return self._data_client is not None

    def get_control_client(self) -> Any:
        """Cliente `iot` (plano de controle), criado uma vez."""
        with self._lock:
            if self._control_client is None:
                self._control_client = self._client_factory("iot", region_name=self._region)
            return self._control_client

    def get_data_client(self) -> Any:
        """Cliente `iot-data` apontado para o endpoint da conta.

        Raises:
            EndpointResolutionError: Se describe_endpoint falhar.
        """
        control = self.get_control_client()
        with self._lock:
            if self._data_client is None:
                self._data_client = self._resolve(control)
            return self._data_client

    async def aget_data_client(self) -> Any:
        """Versão async de get_data_client (boto3 roda em thread)."""
        return await asyncio.to_thread(self.get_data_client)

    def invalidate(self) -> None:
        """Descarta o cliente iot-data memoizado."""
        with self._lock:
            self._data_client = None

    def _resolve(self, control: Any) -> Any:
        try:
            response = control.describe_endpoint(endpointType=self._endpoint_type)
            address = response["endpointAddress"]
        except (BotoCoreError, ClientError, KeyError) as exc:
            logger.error(
                "iot_endpoint_resolution_failed",
                extra={
                    "region": self._region,
                    "endpoint_type": self._endpoint_type,
                    "error_type": type(exc).__name__,
                },
            )
            msg = f"describe_endpoint falhou ({self._endpoint_type})"
            raise EndpointResolutionError(msg) from exc

        logger.info(
            "iot_endpoint_resolved",
            extra={"region": self._region, "endpoint_type": self._endpoint_type},
        )
        return self._client_factory(
            "iot-data",
            region_name=self._region,
            endpoint_url=f"https://{address}",
        )
