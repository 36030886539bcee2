"""Agregador de settings de infraestrutura.

Re-exporta as settings de persistência para uso externo.
"""

from __future__ import annotations

from config.settings.infra.storage import (
    StorageBackend,
    StorageSettings,
    get_storage_settings,
)

__all__ = [
    "StorageBackend",
    "StorageSettings",
    "get_storage_settings",
]
