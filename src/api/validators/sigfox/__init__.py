"""Validators Sigfox: frescor da mensagem e payload de downlink."""

from .downlink import DOWNLINK_HEX_LENGTH, validate_downlink_payload
from .errors import InvalidDownlinkPayloadError, SigfoxValidationError, StaleMessageError
from .freshness import check_freshness, message_age_ms

__all__ = [
    "DOWNLINK_HEX_LENGTH",
    "InvalidDownlinkPayloadError",
    "SigfoxValidationError",
    "StaleMessageError",
    "check_freshness",
    "message_age_ms",
    "validate_downlink_payload",
]
