"""Device shadow — implementações de DeviceShadowProtocol."""

from __future__ import annotations

from app.infra.shadows.aws_iot_shadow import AwsIotDeviceShadow
from app.infra.shadows.memory_shadow import MemoryDeviceShadow

__all__ = [
    "AwsIotDeviceShadow",
    "MemoryDeviceShadow",
]
