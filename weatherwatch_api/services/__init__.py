"""Services package for the WeatherWatch API"""

from weatherwatch_api.services.aggregator import WeatherAggregator, AggregatedResult
from weatherwatch_api.services.air_quality import AirQualityResolver
from weatherwatch_api.services.city_directory import CityDirectory, load_city_directory
from weatherwatch_api.services.weather import WeatherResolver

__all__ = [
    "AggregatedResult",
    "AirQualityResolver",
    "CityDirectory",
    "WeatherAggregator",
    "WeatherResolver",
    "load_city_directory",
]
