from __future__ import annotations

from datetime import datetime, timezone

import pytest

from catalog_backend.cache import EphemeralCache
from catalog_backend.errors import ConflictError, NotFoundError, UnsupportedProviderError
from catalog_backend.ingestion.program_importer import ProgramImporter
from catalog_backend.models.programs import Language, ProgramStatus, Provider, YouTubeMetadata
from catalog_backend.providers.registry import ProviderRegistry
from catalog_backend.services.gateway import ExternalContentGateway

from tests.fakes import FakeStrategy, InMemoryProgramStore, make_details, make_program


def _importer(
    store: InMemoryProgramStore,
    strategy: FakeStrategy,
    *,
    default_language: Language = Language.AR_SA,
) -> ProgramImporter:
    gateway = ExternalContentGateway(cache=EphemeralCache(), registry=ProviderRegistry({Provider.YOUTUBE: strategy}))
    return ProgramImporter(store=store, gateway=gateway, default_language=default_language)


def test_import_creates_draft_with_copied_fields_and_provenance() -> None:
    store = InMemoryProgramStore()
    strategy = FakeStrategy(details={"abc123": make_details("abc123", title="Hello World!")})

    result = _importer(store, strategy).import_with_result(Provider.YOUTUBE, "abc123")

    program = result.program
    assert result.created is True
    assert program.id is not None
    assert program.status == ProgramStatus.DRAFT
    assert program.published_at is None
    assert program.slug == "hello-world"
    assert program.title == "Hello World!"
    assert program.description == "Description of Hello World!"
    assert program.duration_seconds == 125
    assert program.thumbnail_url == "https://i.ytimg.com/vi/abc123/default.jpg"
    assert program.language == Language.AR_SA
    assert program.source_provider == Provider.YOUTUBE
    assert program.external_id == "abc123"
    assert isinstance(program.source_metadata, YouTubeMetadata)
    assert program.source_metadata.video_id == "abc123"


def test_import_uses_configured_default_language() -> None:
    store = InMemoryProgramStore()
    strategy = FakeStrategy(details={"abc": make_details("abc")})

    program = _importer(store, strategy, default_language=Language.EN_US).import_program("YOUTUBE", "abc")

    assert program.language == Language.EN_US


def test_import_is_idempotent_and_fetches_once() -> None:
    store = InMemoryProgramStore()
    strategy = FakeStrategy(details={"abc": make_details("abc")})
    importer = _importer(store, strategy)

    first = importer.import_program(Provider.YOUTUBE, "abc")
    second = importer.import_with_result(Provider.YOUTUBE, "abc")

    assert second.created is False
    assert second.program == first
    assert strategy.fetch_calls == ["abc"]
    assert len(store.rows) == 1


def test_import_returns_tombstoned_record_unchanged() -> None:
    archived = make_program(
        "Old",
        external_id="abc",
        status=ProgramStatus.ARCHIVED,
        deleted_at=datetime(2024, 2, 1, tzinfo=timezone.utc),
    )
    store = InMemoryProgramStore([archived])
    strategy = FakeStrategy(details={"abc": make_details("abc")})

    result = _importer(store, strategy).import_with_result(Provider.YOUTUBE, "abc")

    assert result.created is False
    assert result.program.status == ProgramStatus.ARCHIVED
    assert strategy.fetch_calls == []


def test_import_allocates_next_slug_suffix() -> None:
    store = InMemoryProgramStore(
        [
            make_program("Video", slug="video"),
            make_program("Video", slug="video-1"),
            make_program("Video", slug="video-4"),
        ]
    )
    strategy = FakeStrategy(details={"new": make_details("new", title="Video")})

    program = _importer(store, strategy).import_program(Provider.YOUTUBE, "new")

    assert program.slug == "video-5"


def test_import_of_symbol_only_title_gets_fallback_slug() -> None:
    store = InMemoryProgramStore()
    strategy = FakeStrategy(details={"sym": make_details("sym", title="!!!")})

    program = _importer(store, strategy).import_program(Provider.YOUTUBE, "sym")

    assert program.slug == "untitled"


def test_import_missing_video_creates_nothing() -> None:
    store = InMemoryProgramStore()
    with pytest.raises(NotFoundError):
        _importer(store, FakeStrategy()).import_program(Provider.YOUTUBE, "missing")
    assert store.rows == {}


def test_import_unknown_provider_is_rejected() -> None:
    store = InMemoryProgramStore()
    strategy = FakeStrategy()
    with pytest.raises(UnsupportedProviderError):
        _importer(store, strategy).import_program("VIMEO", "abc")
    assert strategy.fetch_calls == []


def test_import_conflict_on_save_propagates_without_retry() -> None:
    class _RacingStore(InMemoryProgramStore):
        def save(self, program):  # noqa: ANN001, ANN201
            self.saves.append(program)
            raise ConflictError("duplicate key value violates unique constraint programs_slug_key")

    store = _RacingStore()
    strategy = FakeStrategy(details={"abc": make_details("abc")})

    with pytest.raises(ConflictError):
        _importer(store, strategy).import_program(Provider.YOUTUBE, "abc")

    assert len(store.saves) == 1
    assert strategy.fetch_calls == ["abc"]
