"""Testes de validate_runtime_settings e build_app_container."""

from __future__ import annotations

import pytest

from app.bootstrap import build_app_container, validate_runtime_settings
from app.infra.stores import MemoryTableStore


def test_development_only_warns(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.delenv("HUBSPOT_CLIENT_SECRET", raising=False)
    monkeypatch.delenv("SKIP_SIGNATURE_VERIFICATION", raising=False)

    errors = validate_runtime_settings()

    assert "hubspot: HUBSPOT_CLIENT_SECRET não configurado" in errors


def test_production_fails_fast(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("SKIP_SIGNATURE_VERIFICATION", "true")
    monkeypatch.setenv("STORAGE_BACKEND", "memory")

    with pytest.raises(RuntimeError, match="Configuração inválida para production") as exc_info:
        validate_runtime_settings()

    message = str(exc_info.value)
    assert "SKIP_SIGNATURE_VERIFICATION proibido em produção" in message
    assert "STORAGE_BACKEND=memory proibido" in message


def test_valid_configuration_returns_no_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "staging")
    monkeypatch.setenv("HUBSPOT_CLIENT_SECRET", "secret")
    monkeypatch.setenv("STORAGE_BACKEND", "csv")
    monkeypatch.delenv("HUBSPOT_PUSH_UPDATES", raising=False)

    assert validate_runtime_settings() == []


@pytest.mark.asyncio
async def test_build_app_container_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("REMOVE_GMAIL_ALIASES", "false")

    container = build_app_container()
    verdict = await container.validation_service.validate("john+promo@gmail.com")

    assert verdict.current_email == "john+promo@gmail.com"
    assert isinstance(container.validation_service._known_valid, MemoryTableStore)
