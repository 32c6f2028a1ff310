"""Domain errors raised by the admission and lookup pipeline."""


class WeatherGatewayError(Exception):
    """Base exception for weather gateway errors."""


class InvalidInputError(WeatherGatewayError):
    """Raised when a required identifier is missing or blank."""


class KeyAlreadyExistsError(WeatherGatewayError):
    """Raised when adding an API key that is already registered."""


class KeyNotFoundError(WeatherGatewayError):
    """Raised when deleting an API key that is not registered."""


class InvalidApiKeyError(WeatherGatewayError):
    """Raised when a request carries an unknown API key."""


class RateLimitExceededError(WeatherGatewayError):
    """Raised when an API key has used up its quota for the current window."""

    def __init__(self, message: str, count: int, quota: int) -> None:
        super().__init__(message)
        self.count = count
        self.quota = quota


class UpstreamUnavailableError(WeatherGatewayError):
    """Raised when the weather provider cannot produce a description."""
