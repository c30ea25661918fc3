"""
WeatherWatch shared core

Configuration, logging, error taxonomy and domain records used by the
WeatherWatch aggregation API.
"""

__version__ = "1.0.0"
__author__ = "WeatherWatch Team"
