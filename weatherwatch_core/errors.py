"""
Error taxonomy for the aggregation pipeline

Every failure the service reports is a WeatherWatchError carrying a kind
discriminator (and, for upstream failures, the provider that failed). The
rich fields stay server-side; clients only ever see ``{"error": message}``.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorKind(str, Enum):
    """Discriminator for classified failures"""
    CONFIGURATION = "configuration"
    UPSTREAM = "upstream"
    COORDINATES = "coordinates"
    DIRECTORY = "directory"


class Provider(str, Enum):
    """Third-party providers the service calls"""
    WEATHER = "weather"
    AIR_QUALITY = "airQuality"
    INFERENCE = "inference"


AGGREGATION_FAILED = "Failed to fetch weather/air quality data"
AI_REQUEST_FAILED = "AI request failed"


class WeatherWatchError(Exception):
    """Base class for all classified failures"""

    kind: ErrorKind = ErrorKind.UPSTREAM

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        provider: Optional[Provider] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.provider = provider
        self.detail = detail

    def to_dict(self) -> Dict[str, Any]:
        """Client-facing wire shape"""
        return {"error": self.message}

    def log_context(self) -> Dict[str, Any]:
        """Internal fields for server-side logging"""
        return {
            "kind": self.kind.value,
            "provider": self.provider.value if self.provider else None,
            "detail": self.detail,
        }


class ConfigurationError(WeatherWatchError):
    """A required provider credential is not configured"""

    kind = ErrorKind.CONFIGURATION

    def __init__(self, missing: List[str]):
        super().__init__(
            message="Missing API keys",
            detail=f"missing settings: {', '.join(missing)}",
        )
        self.missing = list(missing)


class UpstreamError(WeatherWatchError):
    """A third-party call failed (transport, non-success status or bad body)"""

    kind = ErrorKind.UPSTREAM

    def __init__(self, provider: Provider, detail: Optional[str] = None):
        message = AI_REQUEST_FAILED if provider == Provider.INFERENCE else AGGREGATION_FAILED
        super().__init__(message=message, provider=provider, detail=detail)


class CoordinateResolutionError(WeatherWatchError):
    """The weather provider answered without usable latitude/longitude"""

    kind = ErrorKind.COORDINATES

    def __init__(self, detail: Optional[str] = None):
        super().__init__(
            message="Could not retrieve coordinates for AQI",
            provider=Provider.WEATHER,
            detail=detail,
        )


class DirectoryLoadError(WeatherWatchError):
    """The city dataset could not be read at startup"""

    kind = ErrorKind.DIRECTORY

    def __init__(self, path: str, detail: str):
        super().__init__(
            message="City directory unavailable",
            detail=f"{path}: {detail}",
        )
        self.path = path
