"""
Cache key formats. Every cache key in the codebase is built here.
"""
from __future__ import annotations

from catalog_backend.models.programs import Language, Provider


def _provider_prefix(provider: Provider) -> str:
    return provider.value.lower()


def provider_details(provider: Provider, external_id: str) -> str:
    return f"{_provider_prefix(provider)}:details:{external_id}"


def provider_search(provider: Provider, query: str, limit: int) -> str:
    return f"{_provider_prefix(provider)}:search:{query}:{limit}"


def filters(lang: Language) -> str:
    return f"filters:{lang.value}"
