"""Testes dos endpoints de health e readiness."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.requests import Request

from api.routes.health import router as health_routes
from config.settings import BaseSettings


def _build_request_with_state(state: SimpleNamespace) -> Request:
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/ready",
        "raw_path": b"/ready",
        "query_string": b"",
        "headers": [],
        "app": SimpleNamespace(state=state),
    }

    async def _receive() -> dict[str, object]:
        return {"type": "http.request", "body": b"", "more_body": False}

    return Request(scope, _receive)


@pytest.mark.asyncio
async def test_health_reports_service_version_and_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(
        health_routes,
        "get_base_settings",
        lambda: BaseSettings(environment="staging", service_name="email-validator"),
    )

    response = await health_routes.health_check()

    assert response.status == "healthy"
    assert response.service == "email-validator"
    assert response.version == "1.0.0"
    assert response.environment == "staging"
    assert response.timestamp


@pytest.mark.asyncio
async def test_readiness_not_ready_without_container() -> None:
    response = await health_routes.readiness_check(_build_request_with_state(SimpleNamespace()))

    assert response.status_code == 503


@pytest.mark.asyncio
async def test_readiness_skips_redis_when_not_configured() -> None:
    state = SimpleNamespace(container=SimpleNamespace(redis_client=None))

    response = await health_routes.readiness_check(_build_request_with_state(state))
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["status"] == "ready"
    assert payload["checks"]["redis"]["status"] == "skipped"


@pytest.mark.asyncio
async def test_readiness_ok_when_redis_responds() -> None:
    redis_client = MagicMock()
    redis_client.ping = AsyncMock(return_value=True)
    state = SimpleNamespace(container=SimpleNamespace(redis_client=redis_client))

    response = await health_routes.readiness_check(_build_request_with_state(state))
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["checks"]["redis"]["status"] == "ok"


@pytest.mark.asyncio
async def test_readiness_fails_when_redis_errors() -> None:
    redis_client = MagicMock()
    redis_client.ping = AsyncMock(side_effect=ConnectionError("down"))
    state = SimpleNamespace(container=SimpleNamespace(redis_client=redis_client))

    response = await health_routes.readiness_check(_build_request_with_state(state))
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["checks"]["redis"] == {
        "status": "failed",
        "latency_ms": None,
        "error": "ConnectionError",
    }
