"""Endpoint do callback Sigfox.

Endpoint:
- /sigfox/callback (GET, POST ou PUT): mensagem entregue pela rede Sigfox

Fluxo:
1. Parse do corpo JSON (400 se não for objeto)
2. Lifecycle: normaliza, valida frescor, faz fan-out e compõe o downlink
3. Responde 204 + JSON de downlink (ou 500 texto puro)
4. Encerramento (log final, span, flush) roda destacado da resposta

Query params:
- type: tipo do dispositivo (ex: gps), vira a fila sigfox.types.<type>
- device: device id quando o corpo não traz um
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response, status

from api.connectors.sigfox import InvalidJsonError, parse_callback_body, query_to_dict
from api.routes.sigfox.callback_tasks import schedule_trailing_task
from app.bootstrap import get_callback_lifecycle

if TYPE_CHECKING:
    from app.coordinators.sigfox import CallbackResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def to_http_response(callback_response: CallbackResponse) -> Response:
    """Converte a resposta do lifecycle em Response HTTP.

    A rede Sigfox espera 204 com o JSON de downlink no corpo. Starlette
    omite Content-Length em 204, então ele é declarado explicitamente.
    """
    if callback_response.is_json:
        content = json.dumps(callback_response.body, separators=(",", ":")).encode("utf-8")
    else:
        content = str(callback_response.body).encode("utf-8")
    return Response(
        content=content,
        headers={"content-length": str(len(content))},
        media_type=callback_response.media_type,
        status_code=callback_response.status_code,
    )


@router.api_route("/callback", methods=["GET", "POST", "PUT"], response_model=None)
async def receive_callback(request: Request) -> Response:
    """Recebe uma mensagem do callback Sigfox e devolve o downlink."""
    raw_body = await request.body()

    try:
        payload = parse_callback_body(raw_body)
    except InvalidJsonError as exc:
        logger.warning(
            "callback_json_invalid",
            extra={"error": str(exc), "payload_size": len(raw_body)},
        )
        return Response(
            content="Bad Request",
            media_type="text/plain",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    lifecycle = get_callback_lifecycle()
    outcome = await lifecycle.handle(payload, query_to_dict(request.query_params))

    schedule_trailing_task(
        correlation_id=outcome.invocation.root_trace_id,
        coroutine=outcome.trailing,
    )
    return to_http_response(outcome.response)
