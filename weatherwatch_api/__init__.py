"""
WeatherWatch API

City lookup plus a composite weather + air quality endpoint backed by
Visual Crossing and OpenWeatherMap, with an optional AI chart-feedback relay.
"""

from weatherwatch_core import __version__

__all__ = ["__version__"]
