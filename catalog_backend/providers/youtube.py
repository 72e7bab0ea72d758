"""
YouTube provider strategy.

Searches one configured channel and fetches single-video details, mapping the
YouTube payloads onto `SearchResult` / `ProgramDetails`.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping

import requests

from catalog_backend.config import CatalogSettings
from catalog_backend.errors import NotFoundError, UpstreamUnavailableError
from catalog_backend.integrations.youtube.client import (
    YouTubeClientError,
    fetch_videos,
    parse_iso8601_duration,
    search_videos,
)
from catalog_backend.models.programs import ProgramDetails, Provider, SearchResult, YouTubeMetadata

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"


def _default_thumbnail(snippet: Mapping[str, Any]) -> str:
    thumbnails = snippet.get("thumbnails")
    if isinstance(thumbnails, Mapping):
        default = thumbnails.get("default")
        if isinstance(default, Mapping) and isinstance(default.get("url"), str):
            return default["url"]
    return ""


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


class YouTubeProvider:
    def __init__(
        self,
        *,
        api_key: str | None,
        channel_id: str,
        timeout_seconds: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self._api_key = (api_key or "").strip() or None
        self._channel_id = channel_id
        self._timeout_seconds = timeout_seconds
        self._session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: CatalogSettings, *, session: requests.Session | None = None) -> YouTubeProvider:
        return cls(
            api_key=settings.youtube_api_key,
            channel_id=settings.youtube_channel_id,
            timeout_seconds=settings.youtube_timeout_seconds,
            session=session,
        )

    def _require_api_key(self) -> str:
        if not self._api_key:
            raise UpstreamUnavailableError("YOUTUBE_API_KEY is not set.")
        return self._api_key

    def search(self, query: str, limit: int = 10) -> list[SearchResult]:
        api_key = self._require_api_key()
        logger.info(f"Searching YouTube for {query!r} in channel {self._channel_id}, limit={limit}")
        try:
            items = search_videos(
                query,
                api_key=api_key,
                channel_id=self._channel_id,
                max_results=limit,
                session=self._session,
                timeout_seconds=self._timeout_seconds,
            )
        except YouTubeClientError as exc:
            logger.error(f"YouTube search failed: {exc}")
            raise UpstreamUnavailableError(f"YouTube search failed: {exc}", status_code=exc.status_code) from exc

        results: list[SearchResult] = []
        for item in items:
            snippet = _as_mapping(item.get("snippet"))
            video_id = _as_mapping(item.get("id")).get("videoId")
            results.append(
                SearchResult(
                    external_id=video_id if isinstance(video_id, str) else "",
                    title=str(snippet.get("title") or UNTITLED),
                    thumbnail=_default_thumbnail(snippet),
                    # Search does not return durations; that needs a /videos call.
                    duration_seconds=0,
                    provider=Provider.YOUTUBE,
                )
            )
        logger.info(f"YouTube search returned {len(results)} results")
        return results

    def fetch_details(self, external_id: str) -> ProgramDetails:
        api_key = self._require_api_key()
        try:
            items = fetch_videos(
                [external_id],
                api_key=api_key,
                session=self._session,
                timeout_seconds=self._timeout_seconds,
            )
        except YouTubeClientError as exc:
            if exc.status_code == 404:
                raise NotFoundError(f"Video not found: {external_id}") from exc
            logger.error(f"YouTube fetch details failed for {external_id}: {exc}")
            raise UpstreamUnavailableError(
                f"Failed to fetch video details: {exc}", status_code=exc.status_code
            ) from exc

        if not items:
            raise NotFoundError(f"Video not found: {external_id}")

        video = items[0]
        snippet = _as_mapping(video.get("snippet"))
        content_details = _as_mapping(video.get("contentDetails"))
        statistics = _as_mapping(video.get("statistics"))
        duration_iso = content_details.get("duration") if isinstance(content_details.get("duration"), str) else None

        return ProgramDetails(
            external_id=external_id,
            title=str(snippet.get("title") or UNTITLED),
            description=str(snippet.get("description") or ""),
            duration_seconds=parse_iso8601_duration(duration_iso or "PT0S"),
            thumbnail=_default_thumbnail(snippet),
            provider=Provider.YOUTUBE,
            source_metadata=YouTubeMetadata(
                video_id=external_id,
                channel=str(snippet.get("channelTitle") or ""),
                uploaded_at=str(snippet.get("publishedAt") or datetime.now(timezone.utc).isoformat()),
                view_count=str(statistics.get("viewCount") or "0"),
                duration_iso=duration_iso,
            ),
        )
