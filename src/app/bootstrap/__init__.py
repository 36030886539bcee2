"""Bootstrap da aplicação: inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings
e constrói o AppContainer com as implementações concretas.

Uso:
    from app.bootstrap import build_app_container, initialize_app

    # Na inicialização do serviço
    initialize_app()
    container = build_app_container()
"""

from __future__ import annotations

import logging
import os

from app.bootstrap.dependencies import AppContainer, build_container, close_container
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_email_validation_settings,
    get_hubspot_settings,
    get_storage_settings,
)

# Nome do serviço para logs e métricas
SERVICE_NAME = "email_validator"

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)

__all__ = [
    "AppContainer",
    "build_app_container",
    "close_container",
    "initialize_app",
    "validate_runtime_settings",
]


def initialize_app() -> None:
    """Configura logging estruturado JSON com correlation_id.

    Deve ser chamada uma vez no início do serviço.
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> list[str]:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.

    Returns:
        Lista de erros encontrados (só retorna fora do modo estrito).
    """
    base = get_base_settings()
    strict_mode = base.environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"email: {error}" for error in get_email_validation_settings().validate())
    errors.extend(
        f"hubspot: {error}"
        for error in get_hubspot_settings().validate(is_production=base.is_production)
    )
    errors.extend(f"storage: {error}" for error in get_storage_settings().validate(base))

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return errors

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")
    return errors


def build_app_container() -> AppContainer:
    """Constrói o AppContainer a partir das settings de ambiente."""
    return build_container(
        base=get_base_settings(),
        email=get_email_validation_settings(),
        hubspot=get_hubspot_settings(),
        storage=get_storage_settings(),
    )
