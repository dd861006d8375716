"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    EndpointResolutionError,
    InfrastructureError,
    MissingDeviceIdError,
    QueuePublishError,
)

__all__ = [
    "EndpointResolutionError",
    "InfrastructureError",
    "MissingDeviceIdError",
    "QueuePublishError",
]
