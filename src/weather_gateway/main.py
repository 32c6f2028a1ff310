"""Application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from prometheus_client import make_asgi_app

from weather_gateway import __version__
from weather_gateway.api.routes import health_router, key_router, root_router, weather_router
from weather_gateway.config import Settings, get_settings
from weather_gateway.middleware.logging import LoggingMiddleware, configure_logging
from weather_gateway.services.cache import WeatherCache
from weather_gateway.services.keys import KeyStore
from weather_gateway.services.openweathermap import OpenWeatherMapClient
from weather_gateway.services.rate_limit import RateLimiter, RateLimitResetScheduler
from weather_gateway.services.store import InMemoryWeatherStore


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run the rate limit reset scheduler for the lifetime of the app."""
    scheduler: RateLimitResetScheduler = app.state.reset_scheduler
    scheduler.start()
    try:
        yield
    finally:
        await scheduler.stop()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()

    # Configure logging
    configure_logging(settings)

    # Create FastAPI app
    app = FastAPI(
        title="Weather Gateway API",
        description="API-key gated, rate-limited weather descriptions backed by OpenWeatherMap",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Build components; each app instance owns its own state
    rate_limiter = RateLimiter(settings)
    app.state.key_store = KeyStore(settings.api_keys)
    app.state.rate_limiter = rate_limiter
    app.state.weather_cache = WeatherCache(
        InMemoryWeatherStore(),
        OpenWeatherMapClient(settings),
        upstream_api_key=settings.upstream_api_key,
    )
    app.state.reset_scheduler = RateLimitResetScheduler(
        rate_limiter, settings.rate_limit_window_seconds
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)

    # Include routers
    app.include_router(root_router)
    app.include_router(weather_router)
    app.include_router(key_router)
    app.include_router(health_router)

    # Mount Prometheus metrics endpoint
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    return app


# Create app instance for ASGI servers
app = create_app()


def run() -> None:
    """Run the application with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "weather_gateway.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
