"""
Pytest configuration and shared fixtures
"""

import os
import tempfile

# Settings and the loguru sinks are built on import; keep test runs from
# writing into the working tree.
os.environ.setdefault("LOGS_DIR", os.path.join(tempfile.gettempdir(), "weatherwatch-test-logs"))
os.environ.setdefault("LOG_LEVEL", "WARNING")

import httpx
import pytest

from weatherwatch_core.config import Settings

CITIES_HEADER = '"city","city_ascii","lat","lng","country","iso2","iso3","admin_name","capital","population","id"\n'


def make_settings(**overrides) -> Settings:
    """Settings isolated from the real environment and .env file"""
    values = {
        "vc_api_key": "vc-test-key",
        "air_quality_api_key": "owm-test-key",
        "hf_api_key": "hf-test-key",
        "weather_api_url": "https://weather.test/timeline",
        "air_quality_api_url": "https://air.test/data/2.5/air_pollution",
        "hf_model_url": "https://inference.test/models/test-model",
        "cors_allowed_origins": "http://localhost:5173,https://frontend.test",
        "api_request_timeout": 5.0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def mock_client(handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by ``handler``"""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def cities_csv(tmp_path):
    """Small unsorted cities file"""
    path = tmp_path / "worldcities.csv"
    path.write_text(
        CITIES_HEADER
        + '"Paris","Paris","48.8567","2.3522","France","FR","FRA","Île-de-France","primary","11060000","1250015082"\n'
        + '"Berlin","Berlin","52.5200","13.4050","Germany","DE","DEU","Berlin","primary","4473101","1276451290"\n'
        + '"Oslo","Oslo","59.9133","10.7389","Norway","NO","NOR","Oslo","primary","1064235","1578324706"\n',
        encoding="utf-8",
    )
    return path
