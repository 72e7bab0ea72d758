"""
Provider strategies and the registry that selects them.
"""

from catalog_backend.config import CatalogSettings
from catalog_backend.models.programs import Provider
from catalog_backend.providers.base import ProviderStrategy
from catalog_backend.providers.registry import ProviderRegistry, parse_provider
from catalog_backend.providers.youtube import YouTubeProvider


def build_default_registry(settings: CatalogSettings) -> ProviderRegistry:
    """Registry with every provider the catalog ships with."""
    return ProviderRegistry({Provider.YOUTUBE: YouTubeProvider.from_settings(settings)})


__all__ = [
    "ProviderRegistry",
    "ProviderStrategy",
    "YouTubeProvider",
    "build_default_registry",
    "parse_provider",
]
