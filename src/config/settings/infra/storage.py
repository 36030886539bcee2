"""Settings de persistência dos stores de validação.

Seleciona o backend (arquivo CSV, Redis ou memória) e os caminhos/prefixos.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

StorageBackend = Literal["csv", "redis", "memory"]


@dataclass(frozen=True)
class StorageSettings:
    """Configurações de storage.

    Attributes:
        backend: Backend dos stores (csv|redis|memory)
        known_valid_path: Arquivo CSV de e-mails confirmados
        validation_results_path: Arquivo CSV do log de resultados
        redis_prefix: Namespace das chaves no Redis
    """

    backend: StorageBackend = "csv"
    known_valid_path: str = "data/known_valid_emails.csv"
    validation_results_path: str = "data/validation_results.csv"
    redis_prefix: str = "email_validation:"

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações de storage.

        Args:
            base: BaseSettings para verificar ambiente e REDIS_URL.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []
        valid_backends = {"csv", "redis", "memory"}

        if self.backend not in valid_backends:
            errors.append(f"STORAGE_BACKEND inválido: {self.backend}")

        if self.backend == "memory" and not base.is_development:
            errors.append("STORAGE_BACKEND=memory proibido em staging/production")

        if self.backend == "redis" and not base.redis_url:
            errors.append("STORAGE_BACKEND=redis requer REDIS_URL configurado")

        if self.backend == "csv" and not (
            self.known_valid_path and self.validation_results_path
        ):
            errors.append("STORAGE_BACKEND=csv requer caminhos dos arquivos")

        return errors


def _load_storage_from_env() -> StorageSettings:
    """Carrega StorageSettings de variáveis de ambiente."""
    backend_str = os.getenv("STORAGE_BACKEND", "csv").lower()
    backend: StorageBackend = (
        backend_str if backend_str in ("csv", "redis", "memory") else "csv"
    )
    return StorageSettings(
        backend=backend,
        known_valid_path=os.getenv("KNOWN_VALID_EMAILS_PATH", "data/known_valid_emails.csv"),
        validation_results_path=os.getenv(
            "VALIDATION_RESULTS_PATH", "data/validation_results.csv"
        ),
        redis_prefix=os.getenv("STORAGE_REDIS_PREFIX", "email_validation:"),
    )


@lru_cache(maxsize=1)
def get_storage_settings() -> StorageSettings:
    """Retorna instância cacheada de StorageSettings."""
    return _load_storage_from_env()
