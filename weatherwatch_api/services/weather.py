"""
Weather Resolver for the Visual Crossing timeline API

Queries by free-text location and returns the provider payload verbatim,
including the resolved ``latitude``/``longitude`` used to chain the
air-quality lookup.
"""

from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from weatherwatch_core.config import Settings
from weatherwatch_core.errors import ConfigurationError, Provider, UpstreamError
from weatherwatch_api.services.upstream import UpstreamClient


class WeatherResolver(UpstreamClient):
    """Resolver for the primary (geocoding) weather provider"""

    provider = Provider.WEATHER

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: Optional[str],
        base_url: str,
        unit_group: str = "metric",
    ):
        super().__init__(client)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.unit_group = unit_group

    @classmethod
    def from_settings(cls, client: httpx.AsyncClient, settings: Settings) -> "WeatherResolver":
        return cls(
            client,
            api_key=settings.vc_api_key,
            base_url=settings.weather_api_url,
            unit_group=settings.weather_unit_group,
        )

    async def resolve(self, location: str) -> Dict[str, Any]:
        """
        Fetch the weather timeline for a location.

        Args:
            location: Raw city string from the request; only URL-encoded

        Returns:
            Provider JSON object, unmodified

        Raises:
            ConfigurationError: weather API key not configured
            UpstreamError: provider call failed or body is not a JSON object
        """
        if not self.api_key:
            raise ConfigurationError(["VC_API_KEY"])

        url = f"{self.base_url}/{quote(location, safe='')}"
        params = {
            "unitGroup": self.unit_group,
            "key": self.api_key,
            "contentType": "json",
        }

        data = await self.fetch_json("GET", url, params=params)

        if not isinstance(data, dict):
            self.log.error(f"Unexpected weather payload type: {type(data).__name__}")
            raise UpstreamError(self.provider, f"expected JSON object, got {type(data).__name__}")

        return data
