"""Helpers puros do evento de contato HubSpot (extração e mapeamento)."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.domain.verdict import ValidationVerdict

ALLOWED_SUBSCRIPTION_TYPES: frozenset[str] = frozenset(
    {
        "contact.creation",
        "contact.propertyChange",
        "contact.propertyChange.email",
    }
)

EMAIL_PROPERTY = "email"


def extract_subscription_type(event: Mapping[str, Any]) -> str | None:
    value = event.get("subscriptionType")
    return value if isinstance(value, str) else None


def extract_contact_id(event: Mapping[str, Any]) -> str | None:
    """`objectId` chega como int nos webhooks reais; normaliza para str."""
    value = event.get("objectId")
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    return text or None


def extract_email(event: Mapping[str, Any]) -> str | None:
    """Busca o e-mail em `properties.email.value` ou no par propertyName/propertyValue."""
    properties = event.get("properties")
    if isinstance(properties, dict):
        email_property = properties.get(EMAIL_PROPERTY)
        if isinstance(email_property, dict):
            value = email_property.get("value")
            if isinstance(value, str) and value:
                return value

    if event.get("propertyName") == EMAIL_PROPERTY:
        value = event.get("propertyValue")
        if isinstance(value, str) and value:
            return value

    return None


def build_crm_properties(verdict: ValidationVerdict, checked_at: datetime) -> dict[str, str]:
    """Propriedades enviadas ao contato após a validação.

    `original_email` e `email_was_corrected` só entram quando houve correção.
    """
    properties = {
        "email": verdict.current_email,
        "email_validation_status": verdict.status.value,
        "email_recheck_needed": "true" if verdict.recheck_needed else "false",
        "email_last_checked": checked_at.isoformat(),
    }
    if verdict.was_corrected:
        properties["original_email"] = verdict.original_email
        properties["email_was_corrected"] = "true"
    return properties
