"""
Thought source - HTTP client for the thought generation service

Wire format:

    POST {base_url}/think      (empty body)
      200 {"thought": "..."}
      5xx {"error": "..."}

    GET  {base_url}/test
      200 {"status": "ok", "initialized": true|false}
"""

import logging
from dataclasses import dataclass

import httpx

from .. import config
from ..errors import ThoughtFetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceStatus:
    """Result of a liveness check."""
    online: bool
    initialized: bool = False

    @property
    def label(self) -> str:
        if not self.online:
            return "offline"
        return "connected" if self.initialized else "initializing"


class HttpThoughtSource:
    """Fetches thoughts from the remote generator over HTTP."""

    def __init__(self, base_url: str = config.DEFAULT_SERVER_URL,
                 timeout: float = config.REQUEST_TIMEOUT,
                 transport: httpx.AsyncBaseTransport = None):
        self.base_url = base_url.rstrip('/')
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def fetch_thought(self) -> str:
        """
        Ask the service for one thought.

        Raises ThoughtFetchError on transport errors, non-2xx answers,
        invalid JSON, or a missing / blank `thought` field.
        """
        try:
            response = await self._client.post(
                "/think", headers={"Content-Type": "application/json"}
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            raise ThoughtFetchError(f"Request to {self.base_url}/think failed: {e}") from e
        except ValueError as e:
            raise ThoughtFetchError(f"Thought service sent invalid JSON: {e}") from e

        thought = payload.get("thought") if isinstance(payload, dict) else None
        if not isinstance(thought, str) or not thought.strip():
            raise ThoughtFetchError(f"Thought service sent no thought: {payload!r}")
        return thought

    async def check_status(self) -> ServiceStatus:
        """Liveness check. Never raises; errors mean offline."""
        try:
            response = await self._client.get("/test")
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.debug("Status check failed: %s", e)
            return ServiceStatus(online=False)

        if not isinstance(payload, dict) or payload.get("status") != "ok":
            return ServiceStatus(online=False)
        return ServiceStatus(online=True, initialized=bool(payload.get("initialized")))

    async def aclose(self):
        await self._client.aclose()
