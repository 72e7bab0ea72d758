from __future__ import annotations

import os
from functools import lru_cache

from supabase import Client, create_client


def _require_env(name: str) -> str:
    value = (os.getenv(name) or "").strip()
    if not value:
        raise RuntimeError(f"{name} environment variable is not set")
    return value


@lru_cache
def get_supabase_url() -> str:
    return _require_env("SUPABASE_URL")


@lru_cache
def get_supabase_anon_key() -> str:
    return _require_env("SUPABASE_ANON_KEY")


@lru_cache
def get_supabase_service_key() -> str:
    return _require_env("SUPABASE_SERVICE_ROLE_KEY")


def create_supabase_admin_client(*, url: str | None = None, service_role_key: str | None = None) -> Client:
    """
    Create a Supabase client using the service role key (bypasses RLS).

    Used by the admin CMS routes and `scripts/import_program.py`; drafts and
    archived programs are only visible through this client.
    """

    return create_client(url or get_supabase_url(), service_role_key or get_supabase_service_key())


def create_supabase_anon_client(*, url: str | None = None, anon_key: str | None = None) -> Client:
    """Client for the public discovery routes; row-level security limits it to published programs."""

    return create_client(url or get_supabase_url(), anon_key or get_supabase_anon_key())
