"""Settings específicas da integração HubSpot.

Webhook (assinatura) e API de CRM (push de propriedades corrigidas).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

HUBSPOT_API_BASE_URL: str = "https://api.hubapi.com"
SIGNATURE_HEADER: str = "x-hubspot-signature"


@dataclass(frozen=True)
class HubSpotSettings:
    """Configurações do HubSpot.

    Attributes:
        client_secret: Secret compartilhado para HMAC dos webhooks
        skip_signature_verification: Ignora assinatura (apenas fora de produção)
        access_token: Token da API de CRM (private app)
        api_base_url: URL base da API HubSpot
        push_updates: Envia o veredito de volta ao contato no CRM
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Máximo de tentativas em caso de erro
    """

    # Webhook
    client_secret: str = ""
    skip_signature_verification: bool = False

    # CRM API
    access_token: str = ""
    api_base_url: str = HUBSPOT_API_BASE_URL
    push_updates: bool = False
    request_timeout_seconds: float = 10.0
    max_retries: int = 2

    def validate(self, is_production: bool = False) -> list[str]:
        """Valida configurações mínimas do HubSpot.

        Args:
            is_production: Se o ambiente atual é produção.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.client_secret and not self.skip_signature_verification:
            errors.append("HUBSPOT_CLIENT_SECRET não configurado")

        if self.skip_signature_verification and is_production:
            errors.append("SKIP_SIGNATURE_VERIFICATION proibido em produção")

        if self.push_updates and not self.access_token:
            errors.append("HUBSPOT_PUSH_UPDATES requer HUBSPOT_ACCESS_TOKEN")

        if self.request_timeout_seconds <= 0:
            errors.append("HUBSPOT_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_hubspot_from_env() -> HubSpotSettings:
    """Carrega HubSpotSettings de variáveis de ambiente."""
    return HubSpotSettings(
        client_secret=os.getenv("HUBSPOT_CLIENT_SECRET", ""),
        skip_signature_verification=(
            os.getenv("SKIP_SIGNATURE_VERIFICATION", "").lower() == "true"
        ),
        access_token=os.getenv("HUBSPOT_ACCESS_TOKEN", os.getenv("HUBSPOT_API_KEY", "")),
        api_base_url=os.getenv("HUBSPOT_API_BASE_URL", HUBSPOT_API_BASE_URL),
        push_updates=os.getenv("HUBSPOT_PUSH_UPDATES", "").lower() in ("true", "1"),
        request_timeout_seconds=float(os.getenv("HUBSPOT_REQUEST_TIMEOUT_SECONDS", "10")),
        max_retries=int(os.getenv("HUBSPOT_MAX_RETRIES", "2")),
    )


@lru_cache(maxsize=1)
def get_hubspot_settings() -> HubSpotSettings:
    """Retorna instância cacheada de HubSpotSettings."""
    return _load_hubspot_from_env()
