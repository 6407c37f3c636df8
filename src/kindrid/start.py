"""Startup script: run the server as a subprocess and probe its health."""

import asyncio
import logging
import os
import signal
import sys

import httpx

from kindrid.adapters.health_client import HealthClient, HttpxHealthClient
from kindrid.app_logging import configure_logging
from kindrid.config import Settings

HEALTH_ATTEMPTS = 2

_logger = logging.getLogger("kindrid.start")


def server_command(settings: Settings) -> list[str]:
    """Return the command line that serves the ASGI app."""
    return [
        sys.executable,
        "-m",
        "uvicorn",
        "kindrid.api.asgi:app",
        "--host",
        settings.host,
        "--port",
        str(settings.port),
    ]


def server_env() -> dict[str, str]:
    """Return the child environment, forced to production."""
    return {**os.environ, "ENVIRONMENT": "production"}


async def probe_health(client: HealthClient, retry_delay_seconds: float) -> bool:
    """Probe health once, retrying once after a fixed delay."""
    for attempt in range(1, HEALTH_ATTEMPTS + 1):
        try:
            payload = await client.check()
        except (httpx.HTTPError, ValueError) as exc:
            _logger.warning(
                "Health check failed (attempt %s/%s): %s",
                attempt,
                HEALTH_ATTEMPTS,
                exc,
            )
            if attempt < HEALTH_ATTEMPTS:
                await asyncio.sleep(retry_delay_seconds)
            continue
        _logger.info("Health check passed: %s", payload.get("status"))
        return True
    _logger.error("Server did not pass its health check")
    return False


async def run(settings: Settings) -> int:
    """Launch the server, probe it and wait for it to exit."""
    server = await asyncio.create_subprocess_exec(
        *server_command(settings), env=server_env()
    )
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, _forward_signal, server, sig)

    await asyncio.sleep(settings.startup_probe_delay_seconds)
    client = HttpxHealthClient.create(f"http://127.0.0.1:{settings.port}")
    try:
        await probe_health(client, settings.probe_retry_delay_seconds)
    finally:
        await client.close()
    _logger.info("Startup script completed, server should be running")

    code = await server.wait()
    _logger.info("Server process exited with code %s", code)
    return code


def _forward_signal(server: asyncio.subprocess.Process, sig: signal.Signals) -> None:
    _logger.info("%s received, shutting down...", sig.name)
    if server.returncode is None:
        server.send_signal(sig)


def main() -> None:
    """Entry point for `kindrid-start`."""
    settings = Settings()
    configure_logging(settings.log_level)
    _logger.info("Starting Kindrid server...")
    _logger.info("Environment: %s", settings.environment)
    _logger.info(
        "Railway environment: %s", "Yes" if settings.railway_environment else "No"
    )
    try:
        code = asyncio.run(run(settings))
    except OSError:
        _logger.exception("Failed to start server")
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
