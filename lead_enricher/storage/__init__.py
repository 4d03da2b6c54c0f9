"""Cache and persistence adapters for enrichment profiles."""

from .cache import (
    ProfileCache,
    InMemoryProfileCache,
    SQLProfileCache,
    RedisProfileCache,
    cache_key,
)
from .repository import LeadRepository

__all__ = [
    "ProfileCache",
    "InMemoryProfileCache",
    "SQLProfileCache",
    "RedisProfileCache",
    "cache_key",
    "LeadRepository",
]
