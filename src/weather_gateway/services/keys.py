"""API key allow-list."""

import threading
from collections.abc import Iterable

import structlog
from prometheus_client import Gauge

from weather_gateway.exceptions import (
    InvalidInputError,
    KeyAlreadyExistsError,
    KeyNotFoundError,
)

logger = structlog.get_logger()

# Metrics
api_keys_gauge = Gauge("api_keys", "Number of registered API keys")


def mask_key(key: str) -> str:
    """Shorten an API key for log output."""
    return f"{key[:4]}***" if key else "<empty>"


def _is_blank(key: str | None) -> bool:
    return key is None or not key.strip()


class KeyStore:
    """Thread-safe set of API keys accepted by the service."""

    def __init__(self, seed_keys: Iterable[str] = ()) -> None:
        """Initialize the store with the keys available at startup."""
        self._lock = threading.Lock()
        self._keys: set[str] = {key for key in seed_keys if not _is_blank(key)}
        api_keys_gauge.set(len(self._keys))
        logger.info("Key store initialized", key_count=len(self._keys))

    def validate(self, key: str | None) -> bool:
        """Return True if the key is currently registered."""
        if key is None:
            return False
        with self._lock:
            return key in self._keys

    def add(self, key: str) -> None:
        """Register a new API key.

        Raises:
            InvalidInputError: If the key is empty or blank
            KeyAlreadyExistsError: If the key is already registered
        """
        if _is_blank(key):
            raise InvalidInputError("API key cannot be null or empty.")

        with self._lock:
            if key in self._keys:
                raise KeyAlreadyExistsError("API key already exists.")
            self._keys.add(key)
            size = len(self._keys)

        api_keys_gauge.set(size)
        logger.info("API key added", api_key=mask_key(key))

    def delete(self, key: str) -> None:
        """Remove a registered API key.

        Raises:
            KeyNotFoundError: If the key is blank or not registered
        """
        if _is_blank(key):
            raise KeyNotFoundError("API key does not exist.")

        with self._lock:
            if key not in self._keys:
                raise KeyNotFoundError("API key does not exist.")
            self._keys.remove(key)
            size = len(self._keys)

        api_keys_gauge.set(size)
        logger.info("API key deleted", api_key=mask_key(key))

    def list(self) -> set[str]:
        """Return a snapshot of the registered keys."""
        with self._lock:
            return set(self._keys)

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)
