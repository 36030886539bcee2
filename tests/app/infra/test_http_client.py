"""Testes do HttpClient com httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from app.infra import http as http_module
from app.infra.http import HttpClient, HttpClientConfig, HttpError


@pytest.fixture(autouse=True)
def _no_sleep(monkeypatch: pytest.MonkeyPatch) -> None:
    async def _instant(_seconds: float) -> None:
        return None

    monkeypatch.setattr(http_module.asyncio, "sleep", _instant)


def _client(handler, max_retries: int = 2) -> HttpClient:
    return HttpClient(
        HttpClientConfig(max_retries=max_retries, default_headers={"User-Agent": "test"}),
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_patch_sends_json_and_merged_headers() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    response = await _client(handler).patch(
        "https://api.example.com/x",
        json={"a": 1},
        headers={"Authorization": "Bearer t"},
    )

    assert response.status_code == 200
    assert seen[0].method == "PATCH"
    assert seen[0].headers["user-agent"] == "test"
    assert seen[0].headers["authorization"] == "Bearer t"
    assert json.loads(seen[0].content) == {"a": 1}


@pytest.mark.asyncio
async def test_retries_on_5xx_then_succeeds() -> None:
    statuses = iter([503, 200])

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(next(statuses))

    response = await _client(handler).patch("https://api.example.com/x", json={})

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_retryable_status_exhausted_raises() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(429)

    with pytest.raises(HttpError) as exc_info:
        await _client(handler, max_retries=1).patch("https://api.example.com/x", json={})

    assert exc_info.value.status_code == 429
    assert calls == 2


@pytest.mark.asyncio
async def test_client_error_is_returned_without_retry() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(404)

    response = await _client(handler).patch("https://api.example.com/x", json={})

    assert response.status_code == 404
    assert calls == 1


@pytest.mark.asyncio
async def test_connection_error_is_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(HttpError, match="http_connection_error"):
        await _client(handler, max_retries=0).patch("https://api.example.com/x", json={})
