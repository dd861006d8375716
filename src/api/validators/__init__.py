"""Validators por canal — validação de payloads recebidos e devolvidos.

Estrutura:
- sigfox/: frescor da mensagem e payload de downlink
"""

__all__: list[str] = []
