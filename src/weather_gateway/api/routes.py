"""API route definitions."""

from typing import Annotated

import structlog
from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import HTMLResponse

from weather_gateway.api.dependencies import CacheDep, KeyStoreDep, WeatherServiceDep
from weather_gateway.api.schemas import (
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    KeyValidationResponse,
    MessageResponse,
    ReadinessResponse,
    WeatherHealthResponse,
    WeatherResponse,
)
from weather_gateway.exceptions import (
    InvalidApiKeyError,
    InvalidInputError,
    KeyAlreadyExistsError,
    KeyNotFoundError,
    RateLimitExceededError,
    UpstreamUnavailableError,
)
from weather_gateway.services.keys import mask_key

logger = structlog.get_logger()

# Root router for landing page
root_router = APIRouter(tags=["root"])

# Weather router for lookups and service health
weather_router = APIRouter(prefix="/api/weather", tags=["weather"])

# Key router for API key administration
key_router = APIRouter(prefix="/api/key", tags=["api keys"])

# Health router for probes
health_router = APIRouter(prefix="/health", tags=["health"])


LANDING_PAGE_HTML = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Weather Gateway API</title>
    <style>
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: #16213e;
            color: #e8e8e8;
            display: flex;
            align-items: center;
            justify-content: center;
            min-height: 100vh;
            margin: 0;
        }
        .container { max-width: 600px; padding: 2rem; text-align: center; }
        .example {
            background: rgba(255,255,255,0.05);
            border-radius: 8px;
            padding: 1rem;
            margin: 1.5rem 0;
            font-family: monospace;
            text-align: left;
        }
        .example code { color: #00f2fe; }
        a { color: #4facfe; }
    </style>
</head>
<body>
    <div class="container">
        <h1>Weather Gateway API</h1>
        <p>Cached weather descriptions for registered API keys</p>

        <div class="example">
            <code>GET /api/weather/getWeather?city=London&amp;country=UK&amp;apiKey=...</code>
        </div>

        <p>Each key may make a limited number of requests per hour.</p>
        <p><a href="/docs">API Docs</a></p>
    </div>
</body>
</html>
"""


def _error(status_code: int, code: str, message: str) -> HTTPException:
    """Build an HTTPException carrying an ErrorResponse body."""
    return HTTPException(
        status_code=status_code,
        detail=ErrorResponse(error=ErrorDetail(code=code, message=message)).model_dump(),
    )


@root_router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def landing_page() -> str:
    """Landing page with API information."""
    return LANDING_PAGE_HTML


@weather_router.get(
    "/getWeather",
    response_model=WeatherResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input parameters"},
        403: {"model": ErrorResponse, "description": "Invalid API key"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        503: {"model": ErrorResponse, "description": "External service unavailable"},
    },
)
async def get_weather(
    weather_service: WeatherServiceDep,
    city: Annotated[str, Query(description="City name (e.g., 'London')")],
    country: Annotated[str, Query(description="Country code (e.g., 'UK')")],
    api_key: Annotated[str, Query(alias="apiKey", description="Registered API key")],
) -> WeatherResponse:
    """Get weather description for a city.

    Cached data is returned if available; otherwise the description is fetched
    from OpenWeatherMap and stored.
    """
    try:
        description = await weather_service.get_weather(city, country, api_key)

    except InvalidInputError as e:
        raise _error(status.HTTP_400_BAD_REQUEST, "INVALID_INPUT", str(e)) from e

    except InvalidApiKeyError as e:
        raise _error(status.HTTP_403_FORBIDDEN, "INVALID_API_KEY", "Invalid API key") from e

    except RateLimitExceededError as e:
        raise _error(
            status.HTTP_429_TOO_MANY_REQUESTS,
            "RATE_LIMITED",
            f"Rate limit exceeded: {e.quota} requests per window",
        ) from e

    except UpstreamUnavailableError as e:
        logger.error("Weather lookup failed", city=city, country=country, error=str(e))
        raise _error(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "UPSTREAM_UNAVAILABLE",
            "External service unavailable",
        ) from e

    return WeatherResponse(description=description)


@weather_router.get("/health", response_model=WeatherHealthResponse)
async def weather_health(weather_service: WeatherServiceDep) -> WeatherHealthResponse:
    """Health check - verifies service availability and store connectivity."""
    return WeatherHealthResponse(status="OK", databaseHealthy=weather_service.is_store_healthy())


@key_router.post(
    "/add",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "API key is null or empty"},
        409: {"model": ErrorResponse, "description": "API key already exists"},
    },
)
async def add_api_key(
    keys: KeyStoreDep,
    api_key: Annotated[str, Query(alias="apiKey", description="The API key to add")],
) -> MessageResponse:
    """Add a new API key if it does not already exist."""
    try:
        keys.add(api_key)
    except InvalidInputError as e:
        logger.warning("Attempted to add an invalid API key")
        raise _error(status.HTTP_400_BAD_REQUEST, "INVALID_INPUT", str(e)) from e
    except KeyAlreadyExistsError as e:
        logger.warning("Attempted to add an existing API key", api_key=mask_key(api_key))
        raise _error(status.HTTP_409_CONFLICT, "KEY_EXISTS", str(e)) from e

    return MessageResponse(message="API key added successfully.")


@key_router.delete(
    "/delete",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "API key is null or empty"},
        404: {"model": ErrorResponse, "description": "API key does not exist"},
    },
)
async def delete_api_key(
    keys: KeyStoreDep,
    api_key: Annotated[str, Query(alias="apiKey", description="The API key to delete")],
) -> MessageResponse:
    """Delete an existing API key."""
    if not api_key.strip():
        logger.warning("Attempted to delete an invalid API key")
        raise _error(
            status.HTTP_400_BAD_REQUEST, "INVALID_INPUT", "API key cannot be null or empty."
        )

    try:
        keys.delete(api_key)
    except KeyNotFoundError as e:
        logger.warning("Attempted to delete a non-existent API key", api_key=mask_key(api_key))
        raise _error(status.HTTP_404_NOT_FOUND, "KEY_NOT_FOUND", str(e)) from e

    return MessageResponse(message="API key deleted successfully.")


@key_router.get("/list", response_model=list[str])
async def list_api_keys(keys: KeyStoreDep) -> list[str]:
    """List all registered API keys."""
    snapshot = keys.list()
    logger.info("Listing API keys", key_count=len(snapshot))
    return sorted(snapshot)


@key_router.post("/validate", response_model=KeyValidationResponse)
async def validate_api_key(
    keys: KeyStoreDep,
    api_key: Annotated[str, Query(alias="apiKey", description="The API key to validate")],
) -> KeyValidationResponse:
    """Validate whether the provided API key is registered."""
    is_valid = keys.validate(api_key)
    logger.info("Validated API key", api_key=mask_key(api_key), is_valid=is_valid)
    return KeyValidationResponse(isValid=is_valid)


@health_router.get("/live", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    """Liveness probe - checks if the service is running."""
    return HealthResponse(status="ok")


@health_router.get("/ready", response_model=ReadinessResponse)
async def readiness(cache: CacheDep) -> ReadinessResponse:
    """Readiness probe - checks if the service is ready to accept traffic."""
    store_status = "ok" if cache.is_healthy() else "unhealthy"

    overall_status = "ok" if store_status == "ok" else "unhealthy"

    response = ReadinessResponse(
        status=overall_status,
        checks={"store": store_status},
    )

    if overall_status != "ok":
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=response.model_dump(),
        )

    return response
