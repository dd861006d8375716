"""Modelos de domínio do fan-out Sigfox.

O envelope é criado uma vez por callback; depois do fan-out só existe
como cópia marcada com is_dispatched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

TargetKind = Literal["catch_all", "device", "type"]


class MessageEnvelope(BaseModel):
    """Mensagem publicada em cada fila do fan-out."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    device: str = Field(..., description="Device id normalizado.")
    type: str | None = Field(
        default=None,
        description="Tipo do dispositivo informado na URL do callback (ex: gps).",
    )
    body: dict[str, Any] = Field(..., description="Corpo normalizado do callback.")
    query: dict[str, str] = Field(
        default_factory=dict,
        description="Parâmetros de query da requisição.",
    )
    root_trace_id: str = Field(
        ...,
        alias="rootTraceId",
        description="Root trace id da invocação que originou a mensagem.",
    )
    is_dispatched: bool = Field(
        default=False,
        alias="isDispatched",
        description="True depois que todas as publicações terminaram (informativo).",
    )

    def mark_dispatched(self) -> MessageEnvelope:
        """Retorna cópia com is_dispatched=True."""
        return self.model_copy(update={"is_dispatched": True})

    def to_wire(self) -> bytes:
        """Serializa em JSON com nomes camelCase (NaN vira null)."""
        return self.model_dump_json(by_alias=True).encode("utf-8")


@dataclass(frozen=True, slots=True)
class QueueTarget:
    """Seletor de fila: (None, None) é a fila catch-all."""

    device: str | None = None
    type: str | None = None

    def __post_init__(self) -> None:
        if self.device is not None and self.type is not None:
            msg = "QueueTarget aceita device ou type, não ambos"
            raise ValueError(msg)

    @property
    def kind(self) -> TargetKind:
        if self.device is not None:
            return "device"
        if self.type is not None:
            return "type"
        return "catch_all"

    def topic_name(self, prefix: str) -> str:
        """Nome lógico pontuado da fila (ex: sigfox.devices.all)."""
        if self.device is not None:
            return f"{prefix}.devices.{self.device}"
        if self.type is not None:
            return f"{prefix}.types.{self.type}"
        return f"{prefix}.received"


@dataclass(frozen=True, slots=True)
class PublishOutcome:
    """Resultado de uma publicação do fan-out."""

    target: QueueTarget
    address: str
    ok: bool
    error: str | None = None
