"""App — orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelos de pedido, pagamento e token OAuth
- use_cases/: pipeline de checkout
- services/: renovação do token OAuth
- infra/: token stores e log de eventos
- protocols/: contratos/interfaces
- observability/: correlation id e métricas

Padrão: app executa; api adapta; config configura; utils apoia.
"""
