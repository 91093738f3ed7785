"""API — camada de borda e adapters dos provedores de pagamento.

Responsabilidades:
- Receber requests do frontend e webhooks dos provedores
- Validar corpos e assinaturas
- Construir payloads para as APIs externas
- Normalizar respostas para modelos internos

Subpastas:
- connectors/: clientes HTTP por provedor
- normalizers/: resposta crua → PaymentResult
- payload_builders/: construção dos corpos enviados
- validators/: validação dos corpos recebidos
- routes/: endpoints HTTP por provedor (checkout, OAuth, webhooks, health)

NÃO PODE conter: sequenciamento do pipeline nem persistência.
"""
