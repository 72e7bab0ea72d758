from __future__ import annotations

import pytest

from catalog_backend.config import DEFAULT_YOUTUBE_CHANNEL_ID, load_settings
from catalog_backend.models.programs import Language


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CATALOG_DEFAULT_LANGUAGE", "YOUTUBE_API_KEY", "YOUTUBE_CHANNEL_ID", "YOUTUBE_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)


def test_load_settings_defaults() -> None:
    settings = load_settings()
    assert settings.default_language == Language.AR_SA
    assert settings.youtube_api_key is None
    assert settings.youtube_channel_id == DEFAULT_YOUTUBE_CHANNEL_ID
    assert settings.youtube_timeout_seconds == 10.0


def test_load_settings_reads_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CATALOG_DEFAULT_LANGUAGE", "fr-FR")
    monkeypatch.setenv("YOUTUBE_API_KEY", " KEY ")
    monkeypatch.setenv("YOUTUBE_CHANNEL_ID", "CHAN")
    monkeypatch.setenv("YOUTUBE_TIMEOUT_SECONDS", "2.5")

    settings = load_settings()

    assert settings.default_language == Language.FR_FR
    assert settings.youtube_api_key == "KEY"
    assert settings.youtube_channel_id == "CHAN"
    assert settings.youtube_timeout_seconds == 2.5


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("CATALOG_DEFAULT_LANGUAGE", "de-DE"),
        ("YOUTUBE_TIMEOUT_SECONDS", "soon"),
        ("YOUTUBE_TIMEOUT_SECONDS", "0"),
    ],
)
def test_load_settings_rejects_invalid_values(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(RuntimeError):
        load_settings()
