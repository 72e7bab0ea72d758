"""
Shared program catalog library code.

This package is reused across:
- the FastAPI app in `api/`
- command-line entry points in `scripts/`

App entrypoints (FastAPI routers, CLI scripts) should live outside this package and
import from `catalog_backend` rather than the other way around.
"""
