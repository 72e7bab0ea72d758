"""
YouTube Data API v3 client.
"""

from catalog_backend.integrations.youtube.client import (
    YouTubeClientError,
    fetch_videos,
    parse_iso8601_duration,
    search_videos,
)

__all__ = [
    "YouTubeClientError",
    "fetch_videos",
    "parse_iso8601_duration",
    "search_videos",
]
