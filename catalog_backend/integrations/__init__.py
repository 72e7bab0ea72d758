"""
External content provider integrations (YouTube, ...).

New provider HTTP clients should live under this namespace so they remain
decoupled from app entrypoints (`api/`) and command-line scripts (`scripts/`).
Provider strategies in `catalog_backend.providers` wrap these clients.
"""
