"""Normalizers por canal — conversão de payloads externos para tipos internos.

Estrutura:
- sigfox/: corpo do callback Sigfox e device id
"""

from .sigfox import normalize_device_id, normalize_message_body

__all__ = [
    "normalize_device_id",
    "normalize_message_body",
]
