"""Connectors: adapters de borda por integração.

Estrutura:
- hubspot/: assinatura HMAC e parsing do webhook de contatos
"""

__all__: list[str] = []
