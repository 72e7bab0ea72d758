from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from catalog_backend.errors import UnsupportedProviderError
from catalog_backend.models.programs import Provider
from catalog_backend.providers.base import ProviderStrategy


def parse_provider(value: Provider | str) -> Provider:
    """Map a provider identifier onto the closed `Provider` set."""
    if isinstance(value, Provider):
        return value
    raw = str(value or "").strip().upper()
    try:
        return Provider(raw)
    except ValueError as exc:
        raise UnsupportedProviderError(value) from exc


class ProviderRegistry:
    """
    Immutable mapping from provider identifier to strategy.

    Built once at startup. `register` returns a new registry instead of
    mutating this one.
    """

    def __init__(self, strategies: Mapping[Provider | str, ProviderStrategy] | None = None) -> None:
        resolved = {parse_provider(key): strategy for key, strategy in (strategies or {}).items()}
        self._strategies: Mapping[Provider, ProviderStrategy] = MappingProxyType(resolved)

    def register(self, provider: Provider | str, strategy: ProviderStrategy) -> ProviderRegistry:
        return ProviderRegistry({**self._strategies, parse_provider(provider): strategy})

    def resolve(self, provider: Provider | str) -> ProviderStrategy:
        key = parse_provider(provider)
        strategy = self._strategies.get(key)
        if strategy is None:
            raise UnsupportedProviderError(provider)
        return strategy

    def supported_providers(self) -> list[Provider]:
        return list(self._strategies.keys())
