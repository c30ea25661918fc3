"""
Upstream HTTP access shared by all resolvers

One request per call: no retries, no circuit breaker. Every failure mode of
a third-party call collapses into an UpstreamError tagged with the provider.
"""

import time
from typing import Any, Optional

import httpx

from weatherwatch_core.config import settings
from weatherwatch_core.errors import Provider, UpstreamError
from weatherwatch_core.logger import logger


def create_http_client(timeout: Optional[float] = None) -> httpx.AsyncClient:
    """HTTP client with connection pooling and a bounded per-call timeout"""
    timeout = timeout or settings.api_request_timeout
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout, connect=min(10.0, timeout)),
        limits=httpx.Limits(
            max_connections=20,
            max_keepalive_connections=10,
            keepalive_expiry=30.0
        ),
    )


class UpstreamClient:
    """Base for components making exactly one call to one provider"""

    provider: Provider

    def __init__(self, client: httpx.AsyncClient):
        self.client = client
        self.log = logger.bind(context="upstream", provider=self.provider.value)

    async def fetch_json(self, method: str, url: str, **kwargs) -> Any:
        """
        Perform the request and decode the JSON body.

        Raises:
            UpstreamError: timeout, transport error, non-2xx status or a body
                that is not JSON
        """
        # Query strings carry API keys, keep them out of the logs
        safe_url = url.split("?", 1)[0]
        started = time.perf_counter()

        try:
            response = await self.client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            self.log.error(f"{method} {safe_url} timed out: {type(e).__name__}")
            raise UpstreamError(self.provider, f"timeout: {type(e).__name__}") from e
        except httpx.HTTPStatusError as e:
            body = e.response.text[:500]
            self.log.error(f"{method} {safe_url} returned {e.response.status_code}: {body}")
            raise UpstreamError(self.provider, f"HTTP {e.response.status_code}: {body}") from e
        except httpx.RequestError as e:
            self.log.error(f"{method} {safe_url} failed: {e!r}")
            raise UpstreamError(self.provider, f"transport error: {e!r}") from e

        elapsed_ms = (time.perf_counter() - started) * 1000
        self.log.info(f"{method} {safe_url} -> {response.status_code} in {elapsed_ms:.0f}ms")

        try:
            return response.json()
        except ValueError as e:
            self.log.error(f"{method} {safe_url} returned a non-JSON body: {response.text[:200]}")
            raise UpstreamError(self.provider, f"malformed body: {e}") from e
