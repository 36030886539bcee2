"""Settings do pipeline de validação de e-mail.

Flags de correção e janelas de retenção dos stores.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

SECONDS_PER_DAY = 86400


@dataclass(frozen=True)
class EmailValidationSettings:
    """Configurações de validação.

    Attributes:
        remove_gmail_aliases: Remove sufixo "+alias" de endereços gmail.com
        check_australian_tlds: Corrige TLDs australianos sem ponto (comau -> .com.au)
        known_valid_ttl_days: Retenção de e-mails confirmados como válidos
        validation_log_ttl_days: Retenção do log de resultados
    """

    remove_gmail_aliases: bool = True
    check_australian_tlds: bool = True
    known_valid_ttl_days: int = 30
    validation_log_ttl_days: int = 90

    @property
    def known_valid_ttl_seconds(self) -> int:
        return self.known_valid_ttl_days * SECONDS_PER_DAY

    @property
    def validation_log_ttl_seconds(self) -> int:
        return self.validation_log_ttl_days * SECONDS_PER_DAY

    def validate(self) -> list[str]:
        """Valida janelas de retenção.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.known_valid_ttl_days <= 0:
            errors.append("KNOWN_VALID_TTL_DAYS deve ser > 0")

        if self.validation_log_ttl_days <= 0:
            errors.append("VALIDATION_LOG_TTL_DAYS deve ser > 0")

        return errors


def _load_email_validation_from_env() -> EmailValidationSettings:
    """Carrega EmailValidationSettings de variáveis de ambiente.

    As flags de correção ficam ativas a menos que explicitamente "false".
    """
    return EmailValidationSettings(
        remove_gmail_aliases=os.getenv("REMOVE_GMAIL_ALIASES", "true").lower() != "false",
        check_australian_tlds=os.getenv("CHECK_AUSTRALIAN_TLDS", "true").lower() != "false",
        known_valid_ttl_days=int(os.getenv("KNOWN_VALID_TTL_DAYS", "30")),
        validation_log_ttl_days=int(os.getenv("VALIDATION_LOG_TTL_DAYS", "90")),
    )


@lru_cache(maxsize=1)
def get_email_validation_settings() -> EmailValidationSettings:
    """Retorna instância cacheada de EmailValidationSettings."""
    return _load_email_validation_from_env()
