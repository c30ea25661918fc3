"""
FastAPI dependency providers

Request handlers never reach for module globals: the settings, the shared
HTTP client and the City Directory all come from the application state set
up in the lifespan, so tests can override any of them.
"""

import httpx
from fastapi import Depends, Request

from weatherwatch_core.config import Settings
from weatherwatch_api.services.aggregator import WeatherAggregator
from weatherwatch_api.services.air_quality import AirQualityResolver
from weatherwatch_api.services.ai.feedback import FeedbackRelay
from weatherwatch_api.services.city_directory import CityDirectory
from weatherwatch_api.services.weather import WeatherResolver


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_city_directory(request: Request) -> CityDirectory:
    return request.app.state.city_directory


def get_weather_aggregator(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_app_settings),
) -> WeatherAggregator:
    """Aggregator wired to the configured providers"""
    return WeatherAggregator(
        weather=WeatherResolver.from_settings(client, settings),
        air_quality=AirQualityResolver.from_settings(client, settings),
    )


def get_feedback_relay(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_app_settings),
) -> FeedbackRelay:
    return FeedbackRelay.from_settings(client, settings)
