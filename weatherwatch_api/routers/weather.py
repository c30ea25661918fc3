"""
Weather + Air Quality Router
"""

from fastapi import APIRouter, Depends

from weatherwatch_core.config import Settings
from weatherwatch_api.dependencies import get_app_settings, get_weather_aggregator
from weatherwatch_api.schemas import AggregatedResponse, ErrorResponse
from weatherwatch_api.services.aggregator import WeatherAggregator

router = APIRouter(prefix="/weather", tags=["Weather"])

ERROR_RESPONSES = {500: {"model": ErrorResponse, "description": "Configuration or upstream failure"}}


@router.get("/{city}", response_model=AggregatedResponse, responses=ERROR_RESPONSES)
async def get_weather(city: str, aggregator: WeatherAggregator = Depends(get_weather_aggregator)):
    """
    Weather timeline and current air pollution for a city.

    The city name is passed to the weather provider untouched; its resolved
    coordinates drive the air quality lookup. Any failure yields a single
    500 ``{"error": ...}`` response.
    """
    result = await aggregator.aggregate(city)
    return result.to_dict()


@router.get("", response_model=AggregatedResponse, responses=ERROR_RESPONSES)
async def get_default_weather(
    aggregator: WeatherAggregator = Depends(get_weather_aggregator),
    settings: Settings = Depends(get_app_settings),
):
    """Same as ``/weather/{city}`` for the configured default city"""
    result = await aggregator.aggregate(settings.default_city)
    return result.to_dict()
