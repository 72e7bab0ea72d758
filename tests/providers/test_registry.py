from __future__ import annotations

import pytest

from catalog_backend.errors import InvalidRequestError, UnsupportedProviderError
from catalog_backend.models.programs import Provider
from catalog_backend.providers.registry import ProviderRegistry, parse_provider

from tests.fakes import FakeStrategy


def test_parse_provider_accepts_enum_and_case_insensitive_strings() -> None:
    assert parse_provider(Provider.YOUTUBE) is Provider.YOUTUBE
    assert parse_provider("youtube") is Provider.YOUTUBE
    assert parse_provider(" YouTube ") is Provider.YOUTUBE


def test_parse_provider_rejects_unknown_identifier() -> None:
    with pytest.raises(UnsupportedProviderError) as excinfo:
        parse_provider("VIMEO")
    assert isinstance(excinfo.value, InvalidRequestError)
    assert excinfo.value.provider == "VIMEO"


def test_resolve_returns_registered_strategy() -> None:
    strategy = FakeStrategy()
    registry = ProviderRegistry({Provider.YOUTUBE: strategy})
    assert registry.resolve("YOUTUBE") is strategy
    assert registry.supported_providers() == [Provider.YOUTUBE]


def test_resolve_unregistered_provider_is_unsupported() -> None:
    with pytest.raises(UnsupportedProviderError):
        ProviderRegistry().resolve(Provider.YOUTUBE)


def test_register_returns_new_registry() -> None:
    empty = ProviderRegistry()
    strategy = FakeStrategy()

    extended = empty.register(Provider.YOUTUBE, strategy)

    assert extended.resolve(Provider.YOUTUBE) is strategy
    assert empty.supported_providers() == []
