"""Cache-aside lookup of weather descriptions."""

import structlog
from prometheus_client import Counter, Gauge

from weather_gateway.exceptions import UpstreamUnavailableError
from weather_gateway.services.openweathermap import (
    OpenWeatherMapAPIError,
    OpenWeatherMapClient,
    OpenWeatherMapError,
)
from weather_gateway.services.store import WeatherRecord, WeatherStore

logger = structlog.get_logger()

# Metrics
cache_hits = Counter("cache_hits_total", "Total cache hits")
cache_misses = Counter("cache_misses_total", "Total cache misses")
cache_size_gauge = Gauge("cache_size", "Current number of cached weather records")


class WeatherCache:
    """Weather descriptions keyed by (city, country), backfilled from upstream.

    Stored records never expire: once a pair has been fetched, later lookups
    return the stored description without contacting the provider.
    """

    def __init__(
        self,
        store: WeatherStore,
        client: OpenWeatherMapClient,
        upstream_api_key: str | None = None,
    ) -> None:
        """Initialize cache with its store and upstream client.

        When ``upstream_api_key`` is None the caller's API key is forwarded
        to the provider as its credential.
        """
        self._store = store
        self._client = client
        self._upstream_api_key = upstream_api_key

    async def get_or_fetch(self, city: str, country: str, api_key: str) -> str:
        """Return the description for the pair, fetching it on a miss.

        Raises:
            UpstreamUnavailableError: If the provider fails or has no data
        """
        record = self._store.find(city, country)
        if record is not None:
            cache_hits.inc()
            logger.info("Cache hit for weather request", city=city, country=country, cache_hit=True)
            return record.description

        cache_misses.inc()
        logger.info(
            "Cache miss, fetching from upstream",
            city=city,
            country=country,
            cache_hit=False,
        )

        credential = self._upstream_api_key or api_key
        try:
            description = await self._client.get_description(city, country, credential)
        except OpenWeatherMapAPIError as e:
            logger.error(
                "Upstream API error",
                city=city,
                country=country,
                status_code=e.status_code,
                error=str(e),
            )
            raise UpstreamUnavailableError(f"Failed to fetch weather data: {e}") from e
        except OpenWeatherMapError as e:
            logger.error("Upstream request failed", city=city, country=country, error=str(e))
            raise UpstreamUnavailableError(f"Failed to fetch weather data: {e}") from e

        try:
            self._store.save(WeatherRecord(city=city, country=country, description=description))
        except Exception as e:
            logger.error("Failed to store weather data", city=city, country=country, error=str(e))
            raise UpstreamUnavailableError(f"Failed to store weather data: {e}") from e
        cache_size_gauge.set(len(self._store))
        logger.info("Weather data stored", city=city, country=country, description=description)

        return description

    def is_healthy(self) -> bool:
        """Check whether the backing store answers a liveness probe."""
        try:
            self._store.ping()
        except Exception as e:
            logger.error("Weather store health check failed", error=str(e))
            return False
        return True
