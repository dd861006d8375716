"""Parse inicial do corpo do callback Sigfox (sem PII nos erros)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping


class CallbackRequestError(ValueError):
    """Erro base para requisições de callback malformadas."""


class InvalidJsonError(CallbackRequestError):
    """Corpo não é JSON ou não é um objeto."""


def parse_callback_body(raw_body: bytes | str | None) -> dict[str, Any]:
    """Parseia o corpo JSON do callback.

    Corpo vazio equivale a `{}`.

    Raises:
        InvalidJsonError: Se o JSON estiver inválido ou não for objeto.
    """
    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")
    return payload


def query_to_dict(query: Mapping[str, str] | None) -> dict[str, str]:
    """Query string como dict simples (última ocorrência vence)."""
    return dict(query or {})
