"""Transporte em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Mensagens ficam só no processo.
"""

from __future__ import annotations

from app.protocols.queue_transport import QueueTransportProtocol
from utils.errors import QueuePublishError


class MemoryQueueTransport(QueueTransportProtocol):
    """Guarda publicações por endereço.

    Args:
        failing_addresses: Endereços que recusam publicação (testes de falha).
    """

    name = "memory"
    separator = "."

    def __init__(self, failing_addresses: frozenset[str] = frozenset()) -> None:
        self._failing = failing_addresses
        self.published: list[tuple[str, bytes]] = []

    async def submit(self, address: str, payload: bytes) -> None:
        if address in self._failing:
            raise QueuePublishError(address, "address rejected")
        self.published.append((address, payload))

    def addresses(self) -> list[str]:
        """Endereços publicados, na ordem de chegada."""
        return [address for address, _ in self.published]

    def clear(self) -> None:
        self.published.clear()
