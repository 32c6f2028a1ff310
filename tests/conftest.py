"""Test fixtures."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from weather_gateway.config import Settings
from weather_gateway.main import create_app
from weather_gateway.services.cache import WeatherCache
from weather_gateway.services.keys import KeyStore
from weather_gateway.services.openweathermap import OpenWeatherMapClient
from weather_gateway.services.rate_limit import RateLimiter
from weather_gateway.services.store import InMemoryWeatherStore
from weather_gateway.services.weather import WeatherService

UPSTREAM_URL = "http://api.openweathermap.org/data/2.5/weather"


def weather_payload(*descriptions: str) -> dict:
    """Build an OpenWeatherMap-style body with the given conditions."""
    return {
        "weather": [
            {"id": 800 + i, "main": "Clear", "description": d} for i, d in enumerate(descriptions)
        ],
        "name": "Somewhere",
    }


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        upstream_url=UPSTREAM_URL,
        upstream_timeout_seconds=1.0,
        api_keys=["K1", "K2"],
        rate_limit_quota=5,
        rate_limit_window_seconds=3600,
        log_level="DEBUG",
        log_format="text",
    )


@pytest.fixture
def key_store(settings: Settings) -> KeyStore:
    """Create test key store."""
    return KeyStore(settings.api_keys)


@pytest.fixture
def rate_limiter(settings: Settings) -> RateLimiter:
    """Create test rate limiter."""
    return RateLimiter(settings)


@pytest.fixture
def store() -> InMemoryWeatherStore:
    """Create empty weather store."""
    return InMemoryWeatherStore()


@pytest.fixture
def openweathermap_client(settings: Settings) -> OpenWeatherMapClient:
    """Create test OpenWeatherMap client."""
    return OpenWeatherMapClient(settings)


@pytest.fixture
def weather_cache(
    store: InMemoryWeatherStore, openweathermap_client: OpenWeatherMapClient
) -> WeatherCache:
    """Create test weather cache."""
    return WeatherCache(store, openweathermap_client)


@pytest.fixture
def weather_service(
    key_store: KeyStore, rate_limiter: RateLimiter, weather_cache: WeatherCache
) -> WeatherService:
    """Create test weather service."""
    return WeatherService(key_store, rate_limiter, weather_cache)


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Create test application with fresh state."""
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client."""
    return TestClient(app)
