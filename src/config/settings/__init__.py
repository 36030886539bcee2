"""Agregador de settings do serviço de validação de e-mail.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Validation pipeline settings
from config.settings.email_validation import (
    EmailValidationSettings,
    get_email_validation_settings,
)

# HubSpot settings
from config.settings.hubspot import (
    HUBSPOT_API_BASE_URL,
    SIGNATURE_HEADER,
    HubSpotSettings,
    get_hubspot_settings,
)

# Infrastructure settings
from config.settings.infra import (
    StorageBackend,
    StorageSettings,
    get_storage_settings,
)

__all__ = [
    # Constants
    "HUBSPOT_API_BASE_URL",
    "SIGNATURE_HEADER",
    # Base
    "BaseSettings",
    "EmailValidationSettings",
    "Environment",
    "HubSpotSettings",
    # Infrastructure
    "StorageBackend",
    "StorageSettings",
    "get_base_settings",
    "get_email_validation_settings",
    "get_hubspot_settings",
    "get_storage_settings",
]
