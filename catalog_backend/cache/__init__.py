"""
In-process caching for provider lookups and read-path helpers.
"""

from catalog_backend.cache.ephemeral import CacheStats, EphemeralCache

__all__ = [
    "CacheStats",
    "EphemeralCache",
]
