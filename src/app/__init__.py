"""App — coração do sistema: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- coordinators/: ciclo de vida da requisição do callback
- use_cases/: casos de uso (inputs/outputs, sem IO direto)
- services/: resolução de destinos, fan-out, origem de downlink
- infra/: implementações concretas de IO (filas, shadow, AWS IoT)
- protocols/: contratos/interfaces
- domain/: envelope e destinos de fila
- observability/: root trace id, tracing e métricas

Padrão: app executa; api adapta; config configura; utils apoia.
"""
