"""Persistence for fetched weather descriptions."""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(frozen=True)
class WeatherRecord:
    """Weather description stored for a (city, country) pair."""

    city: str
    country: str
    description: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


class WeatherStore(ABC):
    """Storage backend for weather records.

    Records are keyed by the exact (city, country) strings supplied by the
    caller and are never expired.
    """

    @abstractmethod
    def find(self, city: str, country: str) -> WeatherRecord | None:
        """Return the stored record for the pair, or None."""

    @abstractmethod
    def save(self, record: WeatherRecord) -> WeatherRecord:
        """Persist a record and return it."""

    @abstractmethod
    def ping(self) -> None:
        """Trivial liveness probe; raises if the backend is unusable."""

    @abstractmethod
    def __len__(self) -> int:
        """Return the number of stored records."""


class InMemoryWeatherStore(WeatherStore):
    """Process-local store backed by a dict."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[tuple[str, str], WeatherRecord] = {}

    def find(self, city: str, country: str) -> WeatherRecord | None:
        with self._lock:
            return self._records.get((city, country))

    def save(self, record: WeatherRecord) -> WeatherRecord:
        # Racing fetches for the same pair both land here; last write wins.
        with self._lock:
            self._records[(record.city, record.country)] = record
        return record

    def ping(self) -> None:
        with self._lock:
            len(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
