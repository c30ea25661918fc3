"""
Configuration management using Pydantic Settings
"""

from functools import lru_cache
from typing import List, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Provider credentials (checked per request, not at startup)
    vc_api_key: Optional[str] = None
    air_quality_api_key: Optional[str] = None
    hf_api_key: Optional[str] = None

    @field_validator('vc_api_key', 'air_quality_api_key', 'hf_api_key')
    @classmethod
    def blank_key_is_missing(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank credentials as absent"""
        if v is None or not v.strip():
            return None
        return v.strip()

    # Upstream API Configuration
    weather_api_url: str = "https://weather.visualcrossing.com/VisualCrossingWebServices/rest/services/timeline"
    weather_unit_group: str = "metric"
    air_quality_api_url: str = "http://api.openweathermap.org/data/2.5/air_pollution"
    hf_model_url: str = "https://api-inference.huggingface.co/models/mistralai/Mistral-7B-Instruct-v0.2"
    api_request_timeout: float = 30.0

    @field_validator('weather_unit_group')
    @classmethod
    def validate_unit_group(cls, v: str) -> str:
        """Validate Visual Crossing unit group"""
        if v not in ("metric", "us", "uk", "base"):
            raise ValueError('weather_unit_group must be one of metric, us, uk, base')
        return v

    @field_validator('api_request_timeout')
    @classmethod
    def validate_api_timeout(cls, v: float) -> float:
        """Validate API request timeout"""
        if v < 1:
            raise ValueError('API timeout must be at least 1 second')
        if v > 300:
            raise ValueError('API timeout cannot exceed 300 seconds')
        return v

    # City Directory
    cities_csv_path: str = "data/worldcities.csv"
    default_city: str = "London"

    # HTTP surface
    cors_allowed_origins: str = "http://localhost:5173,https://weather-watch-frontend-0thx.onrender.com"
    enable_ai_feedback: bool = True
    api_host: str = "0.0.0.0"
    api_port: int = 3000

    # Application Configuration
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    logs_dir: str = "logs"

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name"""
        level = v.upper()
        if level not in ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f'Unknown log level: {v}')
        return level

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse the comma-separated origin allow-list"""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    def missing_aggregation_keys(self) -> List[str]:
        """Names of the weather/air-quality credentials that are not configured"""
        missing = []
        if not self.vc_api_key:
            missing.append("VC_API_KEY")
        if not self.air_quality_api_key:
            missing.append("AIR_QUALITY_API_KEY")
        return missing


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Export settings for easy access
settings = get_settings()
