"""Payload builders por canal — respostas devolvidas a sistemas externos.

Estrutura:
- sigfox/: resposta de downlink do callback
"""

__all__: list[str] = []
