"""Discovery providers for web pages, founders and social profiles."""

from .base import SearchProvider
from .web_search import DuckDuckGoSearchProvider
from .synthetic import SyntheticSearchProvider
from .mock import StaticSearchProvider

__all__ = [
    "SearchProvider",
    "DuckDuckGoSearchProvider",
    "SyntheticSearchProvider",
    "StaticSearchProvider",
]
