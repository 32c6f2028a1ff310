"""FastAPI dependencies.

Components are built once per application in ``create_app`` and kept on
``app.state``; these helpers hand them to route handlers.
"""

from typing import Annotated

from fastapi import Depends, Request

from weather_gateway.services.cache import WeatherCache
from weather_gateway.services.keys import KeyStore
from weather_gateway.services.rate_limit import RateLimiter
from weather_gateway.services.weather import WeatherService


def get_key_store(request: Request) -> KeyStore:
    """Get the application's key store."""
    return request.app.state.key_store


def get_rate_limiter(request: Request) -> RateLimiter:
    """Get the application's rate limiter."""
    return request.app.state.rate_limiter


def get_weather_cache(request: Request) -> WeatherCache:
    """Get the application's weather cache."""
    return request.app.state.weather_cache


def get_weather_service(
    keys: Annotated[KeyStore, Depends(get_key_store)],
    limiter: Annotated[RateLimiter, Depends(get_rate_limiter)],
    cache: Annotated[WeatherCache, Depends(get_weather_cache)],
) -> WeatherService:
    """Get weather service instance."""
    return WeatherService(keys, limiter, cache)


# Type aliases for dependency injection
KeyStoreDep = Annotated[KeyStore, Depends(get_key_store)]
CacheDep = Annotated[WeatherCache, Depends(get_weather_cache)]
WeatherServiceDep = Annotated[WeatherService, Depends(get_weather_service)]
