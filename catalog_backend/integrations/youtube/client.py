from __future__ import annotations

import re
from typing import Any, Mapping

import requests

YOUTUBE_API_BASE_URL = "https://www.googleapis.com/youtube/v3"

SEARCH_FIELDS = "items(id,snippet(title,thumbnails,channelTitle))"
VIDEO_FIELDS = (
    "items(id,snippet(title,description,thumbnails,channelTitle,publishedAt),"
    "contentDetails(duration),statistics(viewCount))"
)

_DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")


class YouTubeClientError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, body_snippet: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_snippet = body_snippet


def parse_iso8601_duration(value: str | None) -> int:
    """
    Parse the `PT#H#M#S` subset of ISO 8601 durations into seconds.

    Anything that does not match (including day components) yields 0.
    """
    match = _DURATION_RE.match((value or "").strip())
    if not match:
        return 0
    hours, minutes, seconds = (int(part or 0) for part in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def _request_json(
    session: requests.Session,
    url: str,
    *,
    params: Mapping[str, Any] | None = None,
    timeout_seconds: float = 10.0,
) -> dict[str, Any]:
    headers = {"accept": "application/json"}
    try:
        resp = session.get(url, params=params, headers=headers, timeout=timeout_seconds)
    except requests.Timeout as exc:
        raise YouTubeClientError(f"YouTube request timed out after {timeout_seconds}s.") from exc
    except requests.RequestException as exc:
        raise YouTubeClientError(f"YouTube request failed: {exc}") from exc

    if resp.status_code != 200:
        raise YouTubeClientError(
            f"YouTube request failed with HTTP {resp.status_code}.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        )

    try:
        payload = resp.json()
    except ValueError as exc:
        raise YouTubeClientError(
            "YouTube returned non-JSON response.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        ) from exc

    if not isinstance(payload, dict):
        raise YouTubeClientError("YouTube returned unexpected JSON shape (not an object).")
    return payload


def _items(payload: Mapping[str, Any]) -> list[dict[str, Any]]:
    items = payload.get("items")
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


def search_videos(
    query: str,
    *,
    api_key: str,
    channel_id: str,
    max_results: int = 10,
    session: requests.Session | None = None,
    timeout_seconds: float = 10.0,
) -> list[dict[str, Any]]:
    """
    Search videos of one channel via `/search`.

    Returns the raw `items` list; an empty list when nothing matched.
    """
    session = session or requests.Session()
    params = {
        "part": "snippet",
        "q": query,
        "channelId": channel_id,
        "maxResults": int(max_results),
        "type": "video",
        "fields": SEARCH_FIELDS,
        "key": api_key,
    }
    payload = _request_json(session, f"{YOUTUBE_API_BASE_URL}/search", params=params, timeout_seconds=timeout_seconds)
    return _items(payload)


def fetch_videos(
    video_ids: list[str],
    *,
    api_key: str,
    session: requests.Session | None = None,
    timeout_seconds: float = 10.0,
) -> list[dict[str, Any]]:
    """
    Fetch snippet, content details and statistics via `/videos`.

    Unknown ids are simply absent from the returned list.
    """
    ids = [v.strip() for v in video_ids if isinstance(v, str) and v.strip()]
    if not ids:
        return []
    session = session or requests.Session()
    params = {
        "part": "snippet,contentDetails,statistics",
        "id": ",".join(ids),
        "fields": VIDEO_FIELDS,
        "key": api_key,
    }
    payload = _request_json(session, f"{YOUTUBE_API_BASE_URL}/videos", params=params, timeout_seconds=timeout_seconds)
    return _items(payload)
