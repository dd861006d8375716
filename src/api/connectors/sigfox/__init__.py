"""Connector Sigfox: parse do corpo do callback."""

from .callback_body import CallbackRequestError, InvalidJsonError, parse_callback_body, query_to_dict

__all__ = [
    "CallbackRequestError",
    "InvalidJsonError",
    "parse_callback_body",
    "query_to_dict",
]
