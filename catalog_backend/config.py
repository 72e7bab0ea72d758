"""
Runtime configuration for the catalog.

Values come from environment variables (optionally loaded from `.env`, see
`catalog_backend.utils.env`). Cache sizing and pagination bounds are fixed
constants, not environment settings.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from catalog_backend.models.programs import Language

# Cache sizing (seconds / entries).
CACHE_TTL_ONE_HOUR = 3600.0

CACHE_MAX_SIZE = 1000
CACHE_DEFAULT_TTL = CACHE_TTL_ONE_HOUR

# Pagination bounds, enforced by the boundary layer (`api/`, `scripts/`).
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
MIN_PAGE_SIZE = 1
MIN_PAGE = 1
DEFAULT_SEARCH_LIMIT = 10
DEFAULT_RELATED_LIMIT = 5
MAX_RELATED_LIMIT = 50

DEFAULT_YOUTUBE_CHANNEL_ID = "UCF2JlBUzfP2lqhI0P-vFEKA"
DEFAULT_YOUTUBE_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class CatalogSettings:
    default_language: Language = Language.AR_SA
    youtube_api_key: str | None = None
    youtube_channel_id: str = DEFAULT_YOUTUBE_CHANNEL_ID
    youtube_timeout_seconds: float = DEFAULT_YOUTUBE_TIMEOUT_SECONDS


def _env(name: str) -> str | None:
    value = (os.getenv(name) or "").strip()
    return value or None


def _parse_language(raw: str | None) -> Language:
    if not raw:
        return Language.AR_SA
    try:
        return Language(raw)
    except ValueError as exc:
        allowed = ", ".join(lang.value for lang in Language)
        raise RuntimeError(f"Invalid CATALOG_DEFAULT_LANGUAGE {raw!r}. Allowed: {allowed}") from exc


def _parse_timeout(raw: str | None) -> float:
    if not raw:
        return DEFAULT_YOUTUBE_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError as exc:
        raise RuntimeError("Invalid YOUTUBE_TIMEOUT_SECONDS. It must be a number.") from exc
    if value <= 0:
        raise RuntimeError("Invalid YOUTUBE_TIMEOUT_SECONDS. It must be > 0.")
    return value


def load_settings() -> CatalogSettings:
    return CatalogSettings(
        default_language=_parse_language(_env("CATALOG_DEFAULT_LANGUAGE")),
        youtube_api_key=_env("YOUTUBE_API_KEY"),
        youtube_channel_id=_env("YOUTUBE_CHANNEL_ID") or DEFAULT_YOUTUBE_CHANNEL_ID,
        youtube_timeout_seconds=_parse_timeout(_env("YOUTUBE_TIMEOUT_SECONDS")),
    )


@lru_cache
def get_settings() -> CatalogSettings:
    return load_settings()
