"""Clientes de CRM (IO externo)."""

from app.infra.crm.hubspot_client import HubSpotCrmClient, build_hubspot_crm_client

__all__ = ["HubSpotCrmClient", "build_hubspot_crm_client"]
