"""Test suite for the WeatherWatch API"""
