from __future__ import annotations

from unittest.mock import patch

import pytest

from catalog_backend.config import CatalogSettings
from catalog_backend.errors import NotFoundError, UpstreamUnavailableError
from catalog_backend.integrations.youtube.client import YouTubeClientError
from catalog_backend.models.programs import Provider, YouTubeMetadata
from catalog_backend.providers.youtube import YouTubeProvider


def _provider(api_key: str | None = "KEY") -> YouTubeProvider:
    return YouTubeProvider(api_key=api_key, channel_id="CHAN", timeout_seconds=5)


def _video_item() -> dict:
    return {
        "id": "abc123",
        "snippet": {
            "title": "Episode One",
            "description": "First episode",
            "channelTitle": "Thmanyah",
            "publishedAt": "2024-01-15T10:00:00Z",
            "thumbnails": {"default": {"url": "https://i.ytimg.com/vi/abc123/default.jpg"}},
        },
        "contentDetails": {"duration": "PT1H2M3S"},
        "statistics": {"viewCount": "98765"},
    }


@patch("catalog_backend.providers.youtube.search_videos")
def test_search_maps_items_to_results(mock_search) -> None:  # noqa: ANN001
    mock_search.return_value = [
        {
            "id": {"videoId": "v1"},
            "snippet": {"title": "Match", "thumbnails": {"default": {"url": "https://img/v1.jpg"}}},
        },
        {"id": {"videoId": "v2"}, "snippet": {}},
    ]

    results = _provider().search("match", 2)

    assert [r.external_id for r in results] == ["v1", "v2"]
    assert results[0].title == "Match"
    assert results[0].thumbnail == "https://img/v1.jpg"
    assert results[0].duration_seconds == 0
    assert results[0].provider == Provider.YOUTUBE
    assert results[1].title == "Untitled"
    assert results[1].thumbnail == ""
    assert mock_search.call_args.kwargs["channel_id"] == "CHAN"
    assert mock_search.call_args.kwargs["max_results"] == 2


@patch("catalog_backend.providers.youtube.search_videos")
def test_search_returns_empty_list_when_nothing_matches(mock_search) -> None:  # noqa: ANN001
    mock_search.return_value = []
    assert _provider().search("nothing") == []


@patch("catalog_backend.providers.youtube.search_videos")
def test_search_failure_is_upstream_unavailable(mock_search) -> None:  # noqa: ANN001
    mock_search.side_effect = YouTubeClientError("HTTP 500", status_code=500)
    with pytest.raises(UpstreamUnavailableError) as excinfo:
        _provider().search("x")
    assert excinfo.value.status_code == 500


def test_missing_api_key_is_upstream_unavailable() -> None:
    with pytest.raises(UpstreamUnavailableError, match="YOUTUBE_API_KEY"):
        _provider(api_key="  ").search("x")
    with pytest.raises(UpstreamUnavailableError):
        _provider(api_key=None).fetch_details("abc123")


@patch("catalog_backend.providers.youtube.fetch_videos")
def test_fetch_details_maps_video(mock_fetch) -> None:  # noqa: ANN001
    mock_fetch.return_value = [_video_item()]

    details = _provider().fetch_details("abc123")

    assert details.external_id == "abc123"
    assert details.title == "Episode One"
    assert details.description == "First episode"
    assert details.duration_seconds == 3723
    assert details.thumbnail == "https://i.ytimg.com/vi/abc123/default.jpg"
    assert details.source_metadata == YouTubeMetadata(
        video_id="abc123",
        channel="Thmanyah",
        uploaded_at="2024-01-15T10:00:00Z",
        view_count="98765",
        duration_iso="PT1H2M3S",
    )


@patch("catalog_backend.providers.youtube.fetch_videos")
def test_fetch_details_empty_items_is_not_found(mock_fetch) -> None:  # noqa: ANN001
    mock_fetch.return_value = []
    with pytest.raises(NotFoundError):
        _provider().fetch_details("missing")


@patch("catalog_backend.providers.youtube.fetch_videos")
def test_fetch_details_http_404_is_not_found(mock_fetch) -> None:  # noqa: ANN001
    mock_fetch.side_effect = YouTubeClientError("HTTP 404", status_code=404)
    with pytest.raises(NotFoundError):
        _provider().fetch_details("missing")


@patch("catalog_backend.providers.youtube.fetch_videos")
def test_fetch_details_timeout_is_upstream_unavailable(mock_fetch) -> None:  # noqa: ANN001
    mock_fetch.side_effect = YouTubeClientError("YouTube request timed out after 5s.")
    with pytest.raises(UpstreamUnavailableError):
        _provider().fetch_details("abc123")


def test_from_settings_uses_configured_channel_and_timeout() -> None:
    settings = CatalogSettings(youtube_api_key="KEY", youtube_channel_id="OTHER", youtube_timeout_seconds=2.5)
    provider = YouTubeProvider.from_settings(settings)
    assert provider._channel_id == "OTHER"
    assert provider._timeout_seconds == 2.5
