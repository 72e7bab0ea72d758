"""
Database helpers for catalog services and scripts.
"""

from catalog_backend.db.supabase import create_supabase_admin_client, create_supabase_anon_client

__all__ = [
    "create_supabase_admin_client",
    "create_supabase_anon_client",
]
