"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.email_validation import EmailValidationService

__all__ = [
    "EmailValidationService",
]
