"""Connectors por canal — adapters de borda para requisições externas.

Estrutura:
- sigfox/: parse do corpo do callback Sigfox
"""

__all__: list[str] = []
