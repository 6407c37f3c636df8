"""HTTP client for the server's health endpoint."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class HealthClient(Protocol):
    """Interface for probing a running server."""

    async def check(self) -> dict[str, object]:
        """Return the health payload, raising on failure."""


@dataclass
class HttpxHealthClient(HealthClient):
    """Health client using httpx."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxHealthClient":
        """Create a health client with a managed httpx session."""
        return cls(base_url=base_url, http_client=httpx.AsyncClient())

    async def check(self) -> dict[str, object]:
        """GET /health and return its JSON body."""
        response = await self.http_client.get(f"{self.base_url}/health", timeout=5)
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
