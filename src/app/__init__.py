"""App: orquestração, casos de uso e infraestrutura do gateway.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: casos de uso (dedupe + enqueue de comentários)
- infra/: implementações concretas de IO (Redis, memória)
- protocols/: contratos/interfaces dos stores
- observability/: correlation_id e métricas via logs estruturados

Padrão: app executa; api adapta; config configura; utils apoia.
"""
