"""
Cache-aside access to external content providers.

Concurrent misses for the same key are not coalesced: both callers hit the
provider and the last write wins. Provider reads are idempotent.
"""
from __future__ import annotations

import logging

from catalog_backend.cache import keys as cache_keys
from catalog_backend.cache.ephemeral import CacheStats, EphemeralCache
from catalog_backend.config import DEFAULT_SEARCH_LIMIT
from catalog_backend.models.programs import ProgramDetails, Provider, SearchResult
from catalog_backend.providers.registry import ProviderRegistry, parse_provider

logger = logging.getLogger(__name__)

_MISSING = object()


class ExternalContentGateway:
    def __init__(self, *, cache: EphemeralCache, registry: ProviderRegistry) -> None:
        self._cache = cache
        self._registry = registry

    def search(self, provider: Provider | str, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list[SearchResult]:
        provider = parse_provider(provider)
        cache_key = cache_keys.provider_search(provider, query, limit)
        cached = self._cache.get(cache_key, _MISSING)
        if cached is not _MISSING:
            logger.debug(f"Cache hit {cache_key}")
            return list(cached)

        strategy = self._registry.resolve(provider)
        results = strategy.search(query, limit)
        self._cache.set(cache_key, tuple(results))
        return list(results)

    def fetch_details(self, provider: Provider | str, external_id: str) -> ProgramDetails:
        provider = parse_provider(provider)
        cache_key = cache_keys.provider_details(provider, external_id)
        cached = self._cache.get(cache_key, _MISSING)
        if cached is not _MISSING:
            logger.debug(f"Cache hit {cache_key}")
            return cached

        strategy = self._registry.resolve(provider)
        details = strategy.fetch_details(external_id)
        self._cache.set(cache_key, details)
        return details

    def cache_stats(self) -> CacheStats:
        return self._cache.stats()

    def clear_cache(self) -> None:
        self._cache.clear()
