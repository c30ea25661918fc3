"""
Air Quality Resolver for the OpenWeatherMap air pollution API
"""

from typing import Any, Dict, Optional

import httpx

from weatherwatch_core.config import Settings
from weatherwatch_core.errors import ConfigurationError, Provider, UpstreamError
from weatherwatch_api.services.upstream import UpstreamClient


class AirQualityResolver(UpstreamClient):
    """Resolver for the coordinate-based air pollution provider"""

    provider = Provider.AIR_QUALITY

    def __init__(self, client: httpx.AsyncClient, api_key: Optional[str], base_url: str):
        super().__init__(client)
        self.api_key = api_key
        self.base_url = base_url

    @classmethod
    def from_settings(cls, client: httpx.AsyncClient, settings: Settings) -> "AirQualityResolver":
        return cls(client, api_key=settings.air_quality_api_key, base_url=settings.air_quality_api_url)

    async def resolve(self, latitude: float, longitude: float) -> Dict[str, Any]:
        """
        Fetch current air pollution for a coordinate pair.

        Returns:
            Provider JSON object, unmodified

        Raises:
            ConfigurationError: air quality API key not configured
            UpstreamError: provider call failed or body is not a JSON object
        """
        if not self.api_key:
            raise ConfigurationError(["AIR_QUALITY_API_KEY"])

        params = {"lat": latitude, "lon": longitude, "appid": self.api_key}
        data = await self.fetch_json("GET", self.base_url, params=params)

        if not isinstance(data, dict):
            self.log.error(f"Unexpected air quality payload type: {type(data).__name__}")
            raise UpstreamError(self.provider, f"expected JSON object, got {type(data).__name__}")

        return data
