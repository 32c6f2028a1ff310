"""Weather Gateway: API-key gated, rate-limited weather lookups with caching."""

__version__ = "0.1.0"
