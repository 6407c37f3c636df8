"""Tests for the startup script."""

import asyncio
import sys

import httpx

from kindrid.adapters.health_client import HttpxHealthClient
from kindrid.start import probe_health, server_command, server_env


def _client(handler) -> HttpxHealthClient:  # type: ignore[no-untyped-def]
    transport = httpx.MockTransport(handler)
    return HttpxHealthClient(
        base_url="http://server", http_client=httpx.AsyncClient(transport=transport)
    )


def test_health_client_reads_health_payload() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/health"
        return httpx.Response(200, json={"status": "healthy"})

    client = _client(handler)

    assert asyncio.run(client.check()) == {"status": "healthy"}
    asyncio.run(client.close())


def test_probe_health_retries_once() -> None:
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        if len(calls) == 1:
            return httpx.Response(503, json={"error": "starting"})
        return httpx.Response(200, json={"status": "healthy"})

    assert asyncio.run(probe_health(_client(handler), retry_delay_seconds=0))
    assert calls == ["/health", "/health"]


def test_probe_health_gives_up_after_two_attempts() -> None:
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        raise httpx.ConnectError("connection refused", request=request)

    assert not asyncio.run(probe_health(_client(handler), retry_delay_seconds=0))
    assert len(calls) == 2


def test_server_command_serves_asgi_app(settings) -> None:
    command = server_command(settings)

    assert command[:4] == [sys.executable, "-m", "uvicorn", "kindrid.api.asgi:app"]
    assert command[-2:] == ["--port", "3100"]


def test_server_env_forces_production(monkeypatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "development")

    assert server_env()["ENVIRONMENT"] == "production"
