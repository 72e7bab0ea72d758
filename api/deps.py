"""
Dependency injection for the Supabase client, the shared cache, the provider
registry and the catalog services.

The cache and registry are created once in the app lifespan (see `api/main.py`)
and stored on `app.state`; everything else is built per request.
"""
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Request
from supabase import Client

from catalog_backend.cache.ephemeral import EphemeralCache
from catalog_backend.config import CatalogSettings, get_settings
from catalog_backend.db.supabase import create_supabase_admin_client, create_supabase_anon_client
from catalog_backend.providers.registry import ProviderRegistry
from catalog_backend.repositories.programs import ProgramsRepository
from catalog_backend.services.cms import CmsService
from catalog_backend.services.discovery import DiscoveryService
from catalog_backend.services.gateway import ExternalContentGateway

logger = logging.getLogger(__name__)


def get_supabase_client() -> Client:
    """
    Returns a Supabase client using the anon key (for public read operations).
    """
    return create_supabase_anon_client()


def get_supabase_admin_client() -> Client:
    """
    Returns a Supabase client using the service role key (bypasses RLS).
    Use only for the admin CMS routes.
    """
    return create_supabase_admin_client()


def get_cache(request: Request) -> EphemeralCache:
    return request.app.state.cache


def get_provider_registry(request: Request) -> ProviderRegistry:
    return request.app.state.provider_registry


# Type aliases for dependency injection
SupabaseClient = Annotated[Client, Depends(get_supabase_client)]
SupabaseAdminClient = Annotated[Client, Depends(get_supabase_admin_client)]
Cache = Annotated[EphemeralCache, Depends(get_cache)]
Registry = Annotated[ProviderRegistry, Depends(get_provider_registry)]
Settings = Annotated[CatalogSettings, Depends(get_settings)]


def get_discovery_service(db: SupabaseClient, cache: Cache, settings: Settings) -> DiscoveryService:
    store = ProgramsRepository(db, default_language=settings.default_language)
    return DiscoveryService(store=store, cache=cache)


def get_cms_service(
    db: SupabaseAdminClient,
    cache: Cache,
    registry: Registry,
    settings: Settings,
) -> CmsService:
    store = ProgramsRepository(db, default_language=settings.default_language)
    gateway = ExternalContentGateway(cache=cache, registry=registry)
    return CmsService(store=store, gateway=gateway, cache=cache, default_language=settings.default_language)


Discovery = Annotated[DiscoveryService, Depends(get_discovery_service)]
Cms = Annotated[CmsService, Depends(get_cms_service)]
