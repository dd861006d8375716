"""Protocolos e contratos do core da aplicação."""

from .device_shadow import DeviceShadowProtocol
from .downlink_source import DownlinkSourceProtocol
from .queue_transport import QueueTransportProtocol

__all__ = [
    "DeviceShadowProtocol",
    "DownlinkSourceProtocol",
    "QueueTransportProtocol",
]
