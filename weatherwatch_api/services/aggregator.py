"""
Weather + Air Quality Aggregator

Sequential two-provider pipeline:

    check_credentials -> fetch_weather -> extract_coordinates
        -> fetch_air_quality -> AggregatedResult

Each stage either returns its value or raises a WeatherWatchError; the first
failure ends the pipeline, so a caller never sees a partially filled result.
"""

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Dict, List, NamedTuple

from weatherwatch_core.errors import (
    ConfigurationError,
    CoordinateResolutionError,
    Provider,
    UpstreamError,
    WeatherWatchError,
)
from weatherwatch_core.logger import logger
from weatherwatch_api.services.air_quality import AirQualityResolver
from weatherwatch_api.services.weather import WeatherResolver


class Coordinates(NamedTuple):
    latitude: float
    longitude: float


@dataclass(frozen=True)
class AggregatedResult:
    """Merged response; ``city`` is the caller's query, not a resolved name"""
    city: str
    weather: Dict[str, Any]
    air_quality: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "city": self.city,
            "weather": self.weather,
            "airQuality": self.air_quality,
        }


def _is_coordinate(value: Any) -> bool:
    # bool is a Real subclass; True/False are not coordinates
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def extract_coordinates(weather: Dict[str, Any]) -> Coordinates:
    """
    Pull the resolved latitude/longitude out of a weather payload.

    Raises:
        CoordinateResolutionError: either value missing or not a finite number
    """
    latitude = weather.get("latitude")
    longitude = weather.get("longitude")

    if not _is_coordinate(latitude) or not _is_coordinate(longitude):
        raise CoordinateResolutionError(
            f"latitude={latitude!r}, longitude={longitude!r}"
        )

    return Coordinates(latitude, longitude)


class WeatherAggregator:
    """Chains the weather and air quality resolvers into one response"""

    def __init__(self, weather: WeatherResolver, air_quality: AirQualityResolver):
        self.weather = weather
        self.air_quality = air_quality

    def check_credentials(self) -> None:
        """Fail before any network call when a provider key is absent"""
        missing: List[str] = []
        if not self.weather.api_key:
            missing.append("VC_API_KEY")
        if not self.air_quality.api_key:
            missing.append("AIR_QUALITY_API_KEY")
        if missing:
            raise ConfigurationError(missing)

    async def fetch_weather(self, city: str) -> Dict[str, Any]:
        try:
            return await self.weather.resolve(city)
        except WeatherWatchError:
            raise
        except Exception as e:
            raise UpstreamError(Provider.WEATHER, repr(e)) from e

    async def fetch_air_quality(self, coordinates: Coordinates) -> Dict[str, Any]:
        try:
            return await self.air_quality.resolve(coordinates.latitude, coordinates.longitude)
        except WeatherWatchError:
            raise
        except Exception as e:
            raise UpstreamError(Provider.AIR_QUALITY, repr(e)) from e

    async def aggregate(self, city: str) -> AggregatedResult:
        """
        Resolve weather for a city, then air quality at its coordinates.

        Args:
            city: City query exactly as the client sent it

        Returns:
            AggregatedResult holding both provider payloads untouched

        Raises:
            ConfigurationError: a provider key is missing (no call made)
            UpstreamError: tagged ``weather`` or ``airQuality``
            CoordinateResolutionError: weather payload without usable coordinates
        """
        stage = "credentials"
        try:
            self.check_credentials()

            stage = "weather"
            weather = await self.fetch_weather(city)

            stage = "coordinates"
            coordinates = extract_coordinates(weather)

            stage = "air_quality"
            air_quality = await self.fetch_air_quality(coordinates)
        except WeatherWatchError as e:
            logger.warning(
                f"Aggregation for {city!r} failed at stage={stage}: "
                f"{e.kind.value} {e.log_context()}"
            )
            raise

        logger.info(
            f"Aggregated weather + air quality for {city!r} "
            f"at ({coordinates.latitude}, {coordinates.longitude})"
        )
        return AggregatedResult(city=city, weather=weather, air_quality=air_quality)
