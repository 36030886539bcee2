"""Composition root: constrói os componentes a partir das settings.

Tudo é criado explicitamente em `build_container` (chamado no lifespan)
e guardado em `app.state.container`; não há singletons de serviço.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from api.routes.hubspot.webhook_runtime_tasks import WebhookTaskRegistry
from app.bootstrap.clients import close_async_redis_client, create_async_redis_client
from app.domain.email_rules import CorrectionOptions
from app.domain.verdict import KNOWN_VALID_COLUMNS, VALIDATION_RECORD_COLUMNS
from app.infra.crm import build_hubspot_crm_client
from app.infra.stores import CsvTableStore, MemoryTableStore, RedisTableStore
from app.services import EmailValidationService
from app.use_cases.hubspot import ProcessContactEventUseCase

if TYPE_CHECKING:
    from app.protocols import CrmClientProtocol, ValidationStoreProtocol
    from config.settings import (
        BaseSettings,
        EmailValidationSettings,
        HubSpotSettings,
        StorageSettings,
    )

logger = logging.getLogger(__name__)

KNOWN_VALID_KEY = "email"
VALIDATION_RECORD_KEY = "original_email"


@dataclass
class AppContainer:
    """Componentes da aplicação, criados no startup."""

    base_settings: BaseSettings
    hubspot_settings: HubSpotSettings
    validation_service: EmailValidationService
    contact_event_use_case: ProcessContactEventUseCase
    task_registry: WebhookTaskRegistry
    redis_client: Any | None = None
    crm_client: CrmClientProtocol | None = None

    @property
    def skip_signature_verification(self) -> bool:
        """Bypass de assinatura só vale fora de produção."""
        return (
            self.hubspot_settings.skip_signature_verification
            and not self.base_settings.is_production
        )


# ──────────────────────────────────────────────────────────────────────────────
# Stores
# ──────────────────────────────────────────────────────────────────────────────


def create_validation_stores(
    storage: StorageSettings,
    redis_client: Any | None = None,
) -> tuple[ValidationStoreProtocol, ValidationStoreProtocol]:
    """Cria (known_valid_store, validation_log) para o backend configurado.

    Raises:
        ValueError: backend desconhecido ou redis sem cliente
    """
    if storage.backend == "csv":
        stores: tuple[ValidationStoreProtocol, ValidationStoreProtocol] = (
            CsvTableStore(storage.known_valid_path, KNOWN_VALID_COLUMNS, KNOWN_VALID_KEY),
            CsvTableStore(
                storage.validation_results_path,
                VALIDATION_RECORD_COLUMNS,
                VALIDATION_RECORD_KEY,
            ),
        )
    elif storage.backend == "redis":
        if redis_client is None:
            msg = "STORAGE_BACKEND=redis requer cliente Redis"
            raise ValueError(msg)
        stores = (
            RedisTableStore(
                redis_client,
                KNOWN_VALID_KEY,
                prefix=f"{storage.redis_prefix}known_valid:",
            ),
            RedisTableStore(
                redis_client,
                VALIDATION_RECORD_KEY,
                prefix=f"{storage.redis_prefix}results:",
            ),
        )
    elif storage.backend == "memory":
        stores = (MemoryTableStore(KNOWN_VALID_KEY), MemoryTableStore(VALIDATION_RECORD_KEY))
    else:
        msg = f"STORAGE_BACKEND inválido: {storage.backend}"
        raise ValueError(msg)

    logger.info("validation_stores_created", extra={"backend": storage.backend})
    return stores


# ──────────────────────────────────────────────────────────────────────────────
# Services / use cases
# ──────────────────────────────────────────────────────────────────────────────


def create_validation_service(
    email_settings: EmailValidationSettings,
    known_valid_store: ValidationStoreProtocol,
    validation_log: ValidationStoreProtocol,
) -> EmailValidationService:
    return EmailValidationService(
        known_valid_store,
        validation_log,
        options=CorrectionOptions(
            remove_gmail_aliases=email_settings.remove_gmail_aliases,
            check_australian_tlds=email_settings.check_australian_tlds,
        ),
        known_valid_ttl_seconds=email_settings.known_valid_ttl_seconds,
        validation_log_ttl_seconds=email_settings.validation_log_ttl_seconds,
    )


def build_container(
    *,
    base: BaseSettings,
    email: EmailValidationSettings,
    hubspot: HubSpotSettings,
    storage: StorageSettings,
) -> AppContainer:
    """Monta o container completo a partir das settings."""
    redis_client = (
        create_async_redis_client(base.redis_url) if storage.backend == "redis" else None
    )
    known_valid_store, validation_log = create_validation_stores(storage, redis_client)
    validation_service = create_validation_service(email, known_valid_store, validation_log)

    crm_client = build_hubspot_crm_client(hubspot)
    if hubspot.skip_signature_verification and base.is_production:
        logger.warning("signature_bypass_ignored_in_production")

    container = AppContainer(
        base_settings=base,
        hubspot_settings=hubspot,
        validation_service=validation_service,
        contact_event_use_case=ProcessContactEventUseCase(
            validation_service=validation_service,
            crm_client=crm_client,
        ),
        task_registry=WebhookTaskRegistry(),
        redis_client=redis_client,
        crm_client=crm_client,
    )
    logger.info(
        "app_container_built",
        extra={
            "storage_backend": storage.backend,
            "crm_push_enabled": crm_client is not None,
            "signature_bypass": container.skip_signature_verification,
        },
    )
    return container


async def close_container(container: AppContainer, drain_timeout_seconds: float = 30.0) -> None:
    """Drena tasks do webhook e fecha conexões."""
    await container.task_registry.drain(timeout_seconds=drain_timeout_seconds)
    if container.redis_client is not None:
        await close_async_redis_client(container.redis_client)
