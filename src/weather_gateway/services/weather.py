"""Weather service orchestrating admission checks and the weather cache."""

import structlog

from weather_gateway.exceptions import InvalidApiKeyError, InvalidInputError
from weather_gateway.services.cache import WeatherCache
from weather_gateway.services.keys import KeyStore, mask_key
from weather_gateway.services.rate_limit import RateLimiter

logger = structlog.get_logger()


class WeatherService:
    """Service answering weather lookups for registered API keys."""

    def __init__(self, keys: KeyStore, limiter: RateLimiter, cache: WeatherCache) -> None:
        """Initialize service with its admission controls and cache."""
        self._keys = keys
        self._limiter = limiter
        self._cache = cache

    async def get_weather(self, city: str, country: str, api_key: str) -> str:
        """Get the weather description for a city.

        The API key is checked first, then one unit of its quota is consumed,
        and only then is the cache (or the upstream provider) consulted. The
        first failing step ends the request.

        Args:
            city: City name
            country: Country code
            api_key: Caller's API key

        Returns:
            Weather description

        Raises:
            InvalidInputError: If any argument is blank
            InvalidApiKeyError: If the API key is not registered
            RateLimitExceededError: If the key is over its quota
            UpstreamUnavailableError: If the provider cannot be reached
        """
        for name, value in (("City", city), ("Country", country), ("API key", api_key)):
            if value is None or not value.strip():
                raise InvalidInputError(f"{name} is required")

        logger.debug(
            "Processing weather request",
            city=city,
            country=country,
            api_key=mask_key(api_key),
        )

        if not self._keys.validate(api_key):
            logger.warning("Invalid API key used", api_key=mask_key(api_key))
            raise InvalidApiKeyError("Invalid API key")

        self._limiter.consume(api_key)

        return await self._cache.get_or_fetch(city, country, api_key)

    def is_store_healthy(self) -> bool:
        """Report whether the weather store is reachable."""
        return self._cache.is_healthy()
