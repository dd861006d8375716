"""Exceções de infraestrutura e de acesso a dispositivos."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class QueuePublishError(InfrastructureError):
    """Falha ao publicar envelope em um destino de fila.

    Recuperada localmente pelo dispatcher: nunca aborta os demais destinos.
    """

    def __init__(self, address: str, reason: str) -> None:
        super().__init__(f"publish to {address} failed: {reason}")
        self.address = address
        self.reason = reason


class EndpointResolutionError(InfrastructureError):
    """Falha ao descobrir o endpoint dinâmico do transporte de filas."""


class MissingDeviceIdError(ValueError):
    """Operação exige device id (ex.: acesso ao shadow) e nenhum foi informado."""

    def __init__(self) -> None:
        super().__init__("missing_deviceid")
