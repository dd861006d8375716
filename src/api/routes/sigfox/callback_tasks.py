"""Tasks destacadas do callback Sigfox (encerramento pós-resposta).

O log final, o fim do span raiz e o flush do tracer rodam depois que a
resposta já foi devolvida à rede Sigfox. Cada task roda com o root trace
id da invocação vinculado, então todo log emitido nela (inclusive a
falha do próprio encerramento) carrega o correlation_id certo.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from app.observability import bind_root_trace_id, reset_root_trace_id

if TYPE_CHECKING:
    from collections.abc import Coroutine

logger = logging.getLogger(__name__)

MAX_CONCURRENT_TRAILING = 100

_TASK_SEMAPHORE = asyncio.Semaphore(MAX_CONCURRENT_TRAILING)
_active_tasks: set[asyncio.Task[Any]] = set()


def schedule_trailing_task(
    *,
    correlation_id: str,
    coroutine: Coroutine[Any, Any, None],
) -> int:
    """Agenda o encerramento da invocação com limite de concorrência.

    Args:
        correlation_id: Root trace id da invocação encerrada.
        coroutine: Trabalho de encerramento devolvido pelo lifecycle.

    Returns:
        Número de tasks ativas após o agendamento.
    """
    task = asyncio.create_task(
        _run_trailing(correlation_id, coroutine),
        name=f"sigfox-trailing-{correlation_id}",
    )
    _active_tasks.add(task)
    task.add_done_callback(_active_tasks.discard)
    logger.debug(
        "callback_trailing_scheduled",
        extra={
            "correlation_id": correlation_id,
            "active_tasks": len(_active_tasks),
        },
    )
    return len(_active_tasks)


def active_task_count() -> int:
    return len(_active_tasks)


async def _run_trailing(correlation_id: str, coroutine: Coroutine[Any, Any, None]) -> None:
    token = bind_root_trace_id(correlation_id)
    try:
        async with _TASK_SEMAPHORE:
            await coroutine
    except Exception as exc:
        logger.error(
            "callback_trailing_task_failed",
            extra={
                "correlation_id": correlation_id,
                "error": str(exc),
                "error_type": type(exc).__name__,
                "active_tasks": len(_active_tasks),
            },
        )
    finally:
        reset_root_trace_id(token)


async def drain_trailing_tasks(timeout_seconds: float = 30.0) -> None:
    """Aguarda o encerramento pendente durante o shutdown do processo.

    Tasks que não terminam no prazo são canceladas; o span raiz delas
    fica sem flush.
    """
    if not _active_tasks:
        return

    pending_now = list(_active_tasks)
    logger.info(
        "callback_trailing_shutdown_wait",
        extra={
            "pending_tasks": len(pending_now),
            "timeout_seconds": timeout_seconds,
        },
    )
    _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
    if not pending:
        return

    for task in pending:
        task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)
    logger.warning(
        "callback_trailing_shutdown_cancelled",
        extra={"cancelled_tasks": len(pending)},
    )
