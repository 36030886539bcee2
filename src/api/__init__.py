"""API: camada de borda.

Responsabilidades:
- Receber requests (validação direta e webhooks HubSpot)
- Validar assinaturas e payloads
- Delegar para services/use_cases e montar respostas HTTP

Subpastas:
- connectors/: assinatura e parsing por integração
- routes/: endpoints HTTP

NÃO PODE conter: regras de correção, acesso a stores.
"""
