"""API — camada de borda do callback Sigfox.

Responsabilidades:
- Receber o callback da rede Sigfox (webhook)
- Validar frescor e payload de downlink
- Normalizar o corpo para tipos nativos
- Construir a resposta de downlink

Subpastas:
- connectors/: parse do corpo do callback
- normalizers/: conversão do payload Sigfox → tipos nativos
- payload_builders/: resposta de downlink
- validators/: frescor e payload de downlink
- routes/: endpoints HTTP (callback, health)

NÃO PODE conter: IO de filas, orquestração de use cases.
"""
