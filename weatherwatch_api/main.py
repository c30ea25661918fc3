"""
FastAPI Application - Main Entry Point

Provides REST API for:
- City lookup from the static world-cities dataset
- Composite weather + air quality by city name
- AI feedback on chart data (optional)
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from weatherwatch_core import __version__
from weatherwatch_core.config import Settings, get_settings
from weatherwatch_core.errors import WeatherWatchError
from weatherwatch_core.logger import logger
from weatherwatch_api.routers import ai, cities, weather
from weatherwatch_api.schemas import HealthResponse
from weatherwatch_api.services.city_directory import load_city_directory
from weatherwatch_api.services.upstream import create_http_client


class OriginGateMiddleware:
    """
    Reject cross-origin requests from origins outside the allow-list.

    Runs before routing, so a rejected request never reaches a handler.
    Requests without an Origin header (same-origin, curl, server-to-server)
    pass through.
    """

    def __init__(self, app, allowed_origins):
        self.app = app
        self.allowed_origins = frozenset(allowed_origins)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        origin = None
        for key, value in scope.get("headers", []):
            if key == b"origin":
                origin = value.decode("latin-1")
                break

        if origin is not None and origin not in self.allowed_origins:
            logger.warning(f"Blocked request from origin {origin!r} to {scope.get('path')}")
            response = JSONResponse(status_code=403, content={"error": "Not allowed by CORS"})
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application for the given settings (cached settings by default)"""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan management"""
        logger.info(f"Starting WeatherWatch API v{__version__} ({settings.environment})")

        # Startup fails loudly if the dataset cannot be read
        try:
            app.state.city_directory = load_city_directory(settings.cities_csv_path)
        except WeatherWatchError as e:
            logger.critical(f"City directory failed to load: {e.detail}")
            raise

        missing = settings.missing_aggregation_keys()
        if missing:
            logger.warning(f"Weather endpoint will fail until configured: missing {', '.join(missing)}")
        if settings.enable_ai_feedback and not settings.hf_api_key:
            logger.warning("AI feedback endpoint will fail until configured: missing HF_API_KEY")

        app.state.http_client = create_http_client(settings.api_request_timeout)

        yield

        await app.state.http_client.aclose()
        logger.info("Shutting down WeatherWatch API")

    app = FastAPI(
        title="WeatherWatch API",
        description="""
City lookup and composite weather + air quality data.

| Endpoint | Description |
|----------|-------------|
| `GET /cities` | All known cities, sorted by name |
| `GET /weather/{city}` | Visual Crossing weather + OpenWeatherMap air pollution |
| `POST /ai/feedback` | AI summary of chart data |

Every failure is returned as `{"error": "..."}`.
        """,
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS headers for allowed origins; the gate below rejects all others
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(OriginGateMiddleware, allowed_origins=settings.cors_origins_list)

    @app.exception_handler(WeatherWatchError)
    async def handle_weatherwatch_error(request: Request, exc: WeatherWatchError):
        """Log the internal detail, return only the uniform error shape"""
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} {exc.log_context()}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        logger.warning(f"{request.method} {request.url.path} invalid request: {exc.errors()}")
        return JSONResponse(status_code=422, content={"error": "Invalid request body"})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/", tags=["Health"])
    async def root():
        """API root endpoint with basic info"""
        return {
            "name": "WeatherWatch API",
            "version": __version__,
            "docs": "/docs"
        }

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(request: Request):
        """Service status and dataset size"""
        directory = getattr(request.app.state, "city_directory", None)
        return HealthResponse(
            status="healthy",
            version=__version__,
            environment=settings.environment,
            cities_loaded=len(directory) if directory is not None else 0,
            ai_feedback_enabled=settings.enable_ai_feedback,
        )

    app.include_router(cities.router)
    app.include_router(weather.router)
    if settings.enable_ai_feedback:
        app.include_router(ai.router)

    return app


app = create_app()


def run():
    """Console entry point: serve the API with uvicorn"""
    settings = get_settings()
    uvicorn.run(
        "weatherwatch_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower() if settings.log_level != "SUCCESS" else "info",
    )


if __name__ == "__main__":
    run()
