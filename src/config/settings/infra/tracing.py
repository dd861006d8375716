"""Settings de tracing (OpenTelemetry)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class TracingSettings:
    """Configurações de tracing.

    Attributes:
        enabled: Instala o TracerProvider do SDK no startup
        otlp_endpoint: Endpoint OTLP/HTTP (vazio = sem exporter)
    """

    enabled: bool = True
    otlp_endpoint: str = ""

    def validate(self) -> list[str]:
        """Valida configurações de tracing."""
        errors: list[str] = []
        if self.otlp_endpoint and not self.otlp_endpoint.startswith(("http://", "https://")):
            errors.append(f"OTEL_EXPORTER_OTLP_ENDPOINT inválido: {self.otlp_endpoint}")
        return errors


def _load_tracing_from_env() -> TracingSettings:
    """Carrega TracingSettings de variáveis de ambiente."""
    return TracingSettings(
        enabled=os.getenv("OTEL_SDK_DISABLED", "").lower() not in ("true", "1", "yes"),
        otlp_endpoint=os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "").strip(),
    )


@lru_cache(maxsize=1)
def get_tracing_settings() -> TracingSettings:
    """Retorna instância cacheada de TracingSettings."""
    return _load_tracing_from_env()
