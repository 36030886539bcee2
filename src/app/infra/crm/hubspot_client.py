"""Cliente da API de CRM do HubSpot (atualização de contatos).

Usa o HttpClient com retry de app/infra/http.py. Nunca registra token
nem valores de propriedades em log.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from app.infra.http import HttpClient, HttpClientConfig, HttpError
from app.observability import record_latency

if TYPE_CHECKING:
    import httpx

    from config.settings import HubSpotSettings

logger = logging.getLogger(__name__)

CONTACTS_PATH = "/crm/v3/objects/contacts"


class HubSpotCrmClient:
    """Atualiza propriedades de contatos via PATCH na API v3."""

    def __init__(
        self,
        access_token: str,
        base_url: str,
        http_client: HttpClient | None = None,
    ) -> None:
        if not access_token:
            raise ValueError("access_token vazio")
        self._access_token = access_token
        self._base_url = base_url.rstrip("/")
        self._http = http_client or HttpClient()

    def contact_url(self, contact_id: str) -> str:
        return f"{self._base_url}{CONTACTS_PATH}/{contact_id}"

    async def update_contact(
        self,
        contact_id: str,
        properties: dict[str, str],
    ) -> dict[str, Any]:
        """Envia `properties` para o contato `contact_id`.

        Raises:
            HttpError: resposta não-2xx ou falha de conexão após retries
        """
        started_at = time.perf_counter()
        response = await self._http.patch(
            self.contact_url(contact_id),
            json={"properties": properties},
            headers={"Authorization": f"Bearer {self._access_token}"},
        )
        record_latency("hubspot_crm", "update_contact", (time.perf_counter() - started_at) * 1000)

        if not response.is_success:
            logger.warning(
                "hubspot_contact_update_failed",
                extra={"contact_id": contact_id, "status_code": response.status_code},
            )
            raise HttpError("hubspot_contact_update_failed", status_code=response.status_code)

        logger.info(
            "hubspot_contact_updated",
            extra={"contact_id": contact_id, "properties": sorted(properties)},
        )
        return _safe_json(response)


def _safe_json(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def build_hubspot_crm_client(settings: HubSpotSettings) -> HubSpotCrmClient | None:
    """Cria o cliente só quando o push está habilitado e há token."""
    if not settings.push_updates or not settings.access_token:
        return None
    config = HttpClientConfig(
        timeout_seconds=settings.request_timeout_seconds,
        max_retries=settings.max_retries,
    )
    return HubSpotCrmClient(
        access_token=settings.access_token,
        base_url=settings.api_base_url,
        http_client=HttpClient(config),
    )
