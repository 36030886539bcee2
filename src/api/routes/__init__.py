"""Rotas HTTP da API, adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (validação, webhook HubSpot, health)
- Validação inicial de request (corpo, headers)
- Delegação para connectors/services/use_cases
- Respostas HTTP apropriadas

Estrutura:
- routes/validate/: validação direta
- routes/hubspot/: webhook de contatos + registro de tasks
- routes/health/: health checks e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
