"""Settings do transporte de filas.

Seleciona o backend usado pelo fan-out (memory, redis, aws_iot, pubsub)
e os parâmetros de cada um.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

QueueBackend = Literal["memory", "redis", "aws_iot", "pubsub"]

_VALID_BACKENDS = ("memory", "redis", "aws_iot", "pubsub")


@dataclass(frozen=True)
class QueueSettings:
    """Configurações do transporte de filas.

    Attributes:
        backend: Backend do transporte (memory|redis|aws_iot|pubsub)
        redis_url: URL do Redis (backend redis)
        aws_region: Região do AWS IoT Core (backend aws_iot)
        iot_endpoint_type: Tipo de endpoint pedido ao describe_endpoint
        pubsub_project_id: Projeto GCP dos tópicos (backend pubsub)
        ready_timeout_seconds: Timeout do prepare() no readiness probe
    """

    backend: QueueBackend = "memory"
    redis_url: str = ""
    aws_region: str = ""
    iot_endpoint_type: str = "iot:Data-ATS"
    pubsub_project_id: str = ""
    ready_timeout_seconds: float = 2.0

    def validate(self, environment: str = "development") -> list[str]:
        """Valida configurações do transporte.

        Args:
            environment: Ambiente atual (memory é bloqueado em staging/production)

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.backend not in _VALID_BACKENDS:
            errors.append(f"QUEUE_BACKEND inválido: {self.backend}")
            return errors

        if self.backend == "memory" and environment in ("staging", "production"):
            errors.append(f"QUEUE_BACKEND=memory não permitido em {environment}")

        if self.backend == "redis" and not self.redis_url:
            errors.append("REDIS_URL obrigatório quando QUEUE_BACKEND=redis")

        if self.backend == "aws_iot" and not self.aws_region:
            errors.append("AWS_REGION obrigatório quando QUEUE_BACKEND=aws_iot")

        if self.backend == "pubsub" and not self.pubsub_project_id:
            errors.append("PUBSUB_PROJECT_ID obrigatório quando QUEUE_BACKEND=pubsub")

        if self.ready_timeout_seconds <= 0:
            errors.append("QUEUE_READY_TIMEOUT_SECONDS deve ser positivo")

        return errors


def _load_queue_from_env() -> QueueSettings:
    """Carrega QueueSettings de variáveis de ambiente."""
    backend_str = os.getenv("QUEUE_BACKEND", "memory").strip().lower()
    gcp_project = os.getenv("GCP_PROJECT", os.getenv("GOOGLE_CLOUD_PROJECT", ""))

    return QueueSettings(
        backend=backend_str,  # type: ignore[arg-type]
        redis_url=os.getenv("REDIS_URL", ""),
        aws_region=os.getenv("AWS_REGION", os.getenv("AWS_DEFAULT_REGION", "")),
        iot_endpoint_type=os.getenv("AWS_IOT_ENDPOINT_TYPE", "iot:Data-ATS"),
        pubsub_project_id=os.getenv("PUBSUB_PROJECT_ID", gcp_project),
        ready_timeout_seconds=float(os.getenv("QUEUE_READY_TIMEOUT_SECONDS", "2.0")),
    )


@lru_cache(maxsize=1)
def get_queue_settings() -> QueueSettings:
    """Retorna instância cacheada de QueueSettings."""
    return _load_queue_from_env()
