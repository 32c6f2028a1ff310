"""OpenWeatherMap API client."""

import asyncio
from typing import Any

import httpx
from prometheus_client import Counter, Histogram

from weather_gateway.config import Settings


class OpenWeatherMapError(Exception):
    """Base exception for OpenWeatherMap client errors."""


class OpenWeatherMapTimeoutError(OpenWeatherMapError):
    """Raised when upstream request times out."""


class OpenWeatherMapAPIError(OpenWeatherMapError):
    """Raised when upstream returns an error."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


# Metrics
upstream_requests = Counter(
    "upstream_requests_total",
    "Total upstream API requests",
    ["status"],
)
upstream_duration = Histogram(
    "upstream_request_duration_seconds",
    "Upstream request duration in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0],
)


class OpenWeatherMapClient:
    """HTTP client for the OpenWeatherMap current weather API."""

    def __init__(self, settings: Settings) -> None:
        """Initialize client with settings."""
        self._base_url = settings.upstream_url
        self._timeout = settings.upstream_timeout_seconds

    async def get_description(self, city: str, country: str, credential: str) -> str:
        """Fetch the current weather description for a location.

        Args:
            city: City name, e.g. "London"
            country: Country code, e.g. "UK"
            credential: OpenWeatherMap ``appid``

        Returns:
            Description of the first reported weather condition

        Raises:
            OpenWeatherMapTimeoutError: If request times out
            OpenWeatherMapAPIError: If upstream returns an error
            OpenWeatherMapError: If the request fails or carries no weather data
        """
        params = {
            "q": f"{city},{country}",
            "appid": credential,
        }

        with upstream_duration.time():
            try:
                # httpx timeouts apply per phase; bound the whole exchange as well
                async with asyncio.timeout(self._timeout):
                    async with httpx.AsyncClient(timeout=self._timeout) as client:
                        response = await client.get(self._base_url, params=params)

                if response.status_code != 200:
                    upstream_requests.labels(status="error").inc()
                    raise OpenWeatherMapAPIError(
                        f"OpenWeatherMap API returned {response.status_code}: {response.text}",
                        response.status_code,
                    )

                try:
                    data = response.json()
                except ValueError as e:
                    upstream_requests.labels(status="error").inc()
                    raise OpenWeatherMapError("OpenWeatherMap API returned invalid JSON") from e

                upstream_requests.labels(status="success").inc()
                return self._parse_response(data, city, country)

            except (httpx.TimeoutException, TimeoutError) as e:
                upstream_requests.labels(status="timeout").inc()
                raise OpenWeatherMapTimeoutError(
                    f"OpenWeatherMap API request timed out after {self._timeout}s"
                ) from e

            except httpx.RequestError as e:
                upstream_requests.labels(status="error").inc()
                raise OpenWeatherMapError(f"OpenWeatherMap API request failed: {e}") from e

    def _parse_response(self, data: Any, city: str, country: str) -> str:
        """Extract the first weather description.

        Raises:
            OpenWeatherMapError: If the condition list is missing or empty
        """
        conditions = data.get("weather") if isinstance(data, dict) else None
        if not conditions or not isinstance(conditions, list):
            raise OpenWeatherMapError(
                f"No weather data found for city: {city}, country: {country}"
            )

        first = conditions[0]
        description = first.get("description") if isinstance(first, dict) else None
        if not isinstance(description, str):
            raise OpenWeatherMapError("Missing 'description' in weather condition")

        return description
