"""Protocolo de transporte de filas.

Interface leve (ABC) dependida pelo fan-out. A implementação concreta é
escolhida uma vez no bootstrap (memory, redis, aws_iot, pubsub).
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class QueueTransportProtocol(ABC):
    """Contrato de publicação em filas.

    Atributos de classe:
    - name: identificador do backend (logs e métricas)
    - separator: separador de segmentos no endereço nativo
    """

    name: str = "abstract"
    separator: str = "."

    async def prepare(self) -> None:
        """Resolve recursos dinâmicos antes do fan-out (ex: endpoint).

        Falhas aqui são fatais para a invocação corrente.
        """

    async def healthcheck(self) -> None:
        """Verifica o backend (readiness). Padrão: o próprio prepare()."""
        await self.prepare()

    def address_for(self, topic_name: str) -> str:
        """Converte o nome lógico pontuado no endereço nativo do backend."""
        return self.separator.join(topic_name.split("."))

    @abstractmethod
    async def submit(self, address: str, payload: bytes) -> None:
        """Publica o payload no endereço.

        Raises:
            QueuePublishError: Se o backend recusar a publicação.
        """

    async def close(self) -> None:
        """Libera conexões do backend (no shutdown)."""
