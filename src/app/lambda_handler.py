"""Entrypoint AWS Lambda (API Gateway proxy) do callback Sigfox.

Handler: app.lambda_handler.lambda_handler

Diferente do servidor HTTP, a Lambda congela o processo assim que o
handler retorna: o encerramento da invocação (log final, span, flush)
é aguardado antes de devolver a resposta ao API Gateway.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
from typing import Any

from api.connectors.sigfox import InvalidJsonError, parse_callback_body, query_to_dict
from api.routes.sigfox.callback import to_http_response
from app.bootstrap import get_callback_lifecycle, initialize_app, validate_runtime_settings

# Cold start: logging, tracing e settings uma vez por container
initialize_app()
validate_runtime_settings()

logger = logging.getLogger(__name__)

# Um event loop por container; clientes async sobrevivem entre invocações
_loop = asyncio.new_event_loop()


def _extract_request(event: dict[str, Any]) -> tuple[dict[str, Any], dict[str, str]]:
    """Corpo e query de um evento proxy; invocação direta usa o próprio evento."""
    if "body" not in event and "httpMethod" not in event:
        return dict(event), {}

    raw_body = event.get("body")
    if raw_body and event.get("isBase64Encoded"):
        try:
            raw_body = base64.b64decode(raw_body, validate=True)
        except binascii.Error as exc:
            raise InvalidJsonError("invalid_base64") from exc
    return parse_callback_body(raw_body), query_to_dict(event.get("queryStringParameters"))


async def _invoke(payload: dict[str, Any], query: dict[str, str]) -> dict[str, Any]:
    outcome = await get_callback_lifecycle().handle(payload, query)
    try:
        await outcome.trailing
    except Exception as exc:
        logger.error(
            "callback_trailing_task_failed",
            extra={
                "correlation_id": outcome.invocation.root_trace_id,
                "error_type": type(exc).__name__,
            },
        )

    response = to_http_response(outcome.response)
    return {
        "statusCode": response.status_code,
        "body": response.body.decode("utf-8"),
        "headers": {"Content-Type": outcome.response.media_type},
    }


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Processa um callback Sigfox entregue via API Gateway."""
    try:
        payload, query = _extract_request(event)
    except InvalidJsonError as exc:
        logger.warning("callback_json_invalid", extra={"error": str(exc)})
        return {
            "statusCode": 400,
            "body": "Bad Request",
            "headers": {"Content-Type": "text/plain"},
        }

    return _loop.run_until_complete(_invoke(payload, query))
