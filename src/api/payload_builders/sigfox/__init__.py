"""Payload builders Sigfox: resposta de downlink do callback."""

from .downlink import DownlinkResponseComposer, compose_no_data_response, wants_no_downlink

__all__ = [
    "DownlinkResponseComposer",
    "compose_no_data_response",
    "wants_no_downlink",
]
