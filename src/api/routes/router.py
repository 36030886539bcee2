"""Agregador de rotas.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.hubspot.webhook import router as hubspot_webhook_router
from api.routes.validate.router import router as validate_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health checks na raiz (/health e /ready)
    api_router.include_router(health_router, tags=["health"])

    # Validação direta
    api_router.include_router(validate_router, prefix="/validate", tags=["validate"])

    # HubSpot
    api_router.include_router(
        hubspot_webhook_router,
        prefix="/webhooks/hubspot",
        tags=["hubspot"],
    )

    return api_router
