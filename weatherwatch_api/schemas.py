"""
Pydantic schemas for API request/response validation
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class AggregatedResponse(BaseModel):
    """Weather and air quality for one city query"""
    model_config = ConfigDict(populate_by_name=True)

    city: str
    weather: Dict[str, Any]
    air_quality: Dict[str, Any] = Field(alias="airQuality")


class FeedbackRequest(BaseModel):
    """Chart data to analyse; any JSON value is accepted"""
    chartData: Any = None


class FeedbackResponse(BaseModel):
    feedback: str


class ErrorResponse(BaseModel):
    """Uniform error body for every failure"""
    error: str


class HealthResponse(BaseModel):
    status: str
    version: str
    environment: str
    cities_loaded: int
    ai_feedback_enabled: Optional[bool] = None
