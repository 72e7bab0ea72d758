"""
Admin (CMS) operations: external search, import, draft listing, edit,
publish and archive.

Edits are partial updates over an explicit field allow-list: a field is
applied whenever the caller supplies it, falsy values included (an empty
description clears it). Omitted fields are left untouched.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Mapping

from catalog_backend.cache import keys as cache_keys
from catalog_backend.cache.ephemeral import EphemeralCache
from catalog_backend.config import DEFAULT_PAGE_SIZE, DEFAULT_SEARCH_LIMIT
from catalog_backend.errors import InvalidRequestError, NotFoundError
from catalog_backend.ingestion.program_importer import ProgramImporter
from catalog_backend.models.programs import (
    Language,
    OpaqueMetadata,
    Program,
    ProgramCategory,
    ProgramStatus,
    Provider,
    SearchResult,
    SourceMetadata,
    YouTubeMetadata,
    parse_source_metadata,
)
from catalog_backend.repositories.base import ProgramStore
from catalog_backend.services.gateway import ExternalContentGateway

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "duration_seconds",
        "language",
        "category",
        "thumbnail_url",
        "source_metadata",
    }
)


def _coerce_enum(enum_cls: type, field_name: str, value: Any) -> Any:
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise InvalidRequestError(f"Invalid {field_name}: {value!r}") from exc


def _coerce_metadata(program: Program, value: Any) -> SourceMetadata:
    if isinstance(value, (YouTubeMetadata, OpaqueMetadata)):
        return value
    if value is None:
        return OpaqueMetadata()
    if not isinstance(value, Mapping):
        raise InvalidRequestError("source_metadata must be an object.")
    return parse_source_metadata(program.source_provider, value)


class CmsService:
    def __init__(
        self,
        *,
        store: ProgramStore,
        gateway: ExternalContentGateway,
        cache: EphemeralCache,
        default_language: Language = Language.AR_SA,
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._cache = cache
        self._importer = ProgramImporter(store=store, gateway=gateway, default_language=default_language)

    def search_external(
        self,
        provider: Provider | str,
        query: str,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> list[SearchResult]:
        return self._gateway.search(provider, query, limit)

    def import_program(self, provider: Provider | str, external_id: str) -> Program:
        return self._importer.import_program(provider, external_id)

    def list_drafts(self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> tuple[list[Program], int]:
        return self._store.find_drafts_page(page, limit)

    def get_editor_view(self, program_id: str) -> Program:
        program = self._store.find_by_id(program_id)
        if program is None or program.is_deleted:
            raise NotFoundError("Program not found")
        return program

    def update_program(self, program_id: str, changes: Mapping[str, Any]) -> Program:
        unknown = sorted(set(changes) - EDITABLE_FIELDS)
        if unknown:
            raise InvalidRequestError(f"Unsupported field(s): {', '.join(unknown)}")

        program = self.get_editor_view(program_id)

        patch: dict[str, Any] = {}
        if "title" in changes:
            title = str(changes["title"] or "")
            if not title.strip() and program.status == ProgramStatus.PUBLISHED:
                raise InvalidRequestError("A published program must keep a title.")
            patch["title"] = title
        if "description" in changes:
            patch["description"] = changes["description"]
        if "duration_seconds" in changes:
            duration = changes["duration_seconds"]
            if not isinstance(duration, int) or isinstance(duration, bool) or duration < 0:
                raise InvalidRequestError("duration_seconds must be a non-negative integer.")
            patch["duration_seconds"] = duration
        if "language" in changes:
            language = _coerce_enum(Language, "language", changes["language"])
            if language is None:
                raise InvalidRequestError("language cannot be empty.")
            patch["language"] = language
        if "category" in changes:
            patch["category"] = _coerce_enum(ProgramCategory, "category", changes["category"])
        if "thumbnail_url" in changes:
            patch["thumbnail_url"] = changes["thumbnail_url"]
        if "source_metadata" in changes:
            patch["source_metadata"] = _coerce_metadata(program, changes["source_metadata"])

        saved = self._store.save(replace(program, **patch))
        logger.info(f"Updated program id={program_id} fields={sorted(patch.keys())}")
        self._invalidate_program_cache(program)
        return saved

    def publish_program(self, program_id: str) -> Program:
        program = self.get_editor_view(program_id)

        if not program.title.strip() or not program.slug.strip():
            raise InvalidRequestError("Program must have title and slug before publishing")

        published = replace(
            program,
            status=ProgramStatus.PUBLISHED,
            published_at=program.published_at or datetime.now(timezone.utc),
        )
        saved = self._store.save(published)
        logger.info(f"Published program id={program_id}")
        self._invalidate_program_cache(program)
        return saved

    def archive_program(self, program_id: str) -> None:
        program = self.get_editor_view(program_id)
        self._store.soft_delete(program_id)
        self._invalidate_program_cache(program)

    def _invalidate_program_cache(self, program: Program) -> None:
        if program.source_provider and program.external_id:
            self._cache.delete(cache_keys.provider_details(program.source_provider, program.external_id))
