"""
In-memory collaborators shared by the service and importer tests.
"""
from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from catalog_backend.errors import ConflictError, NotFoundError
from catalog_backend.models.programs import (
    Language,
    Program,
    ProgramDetails,
    ProgramStatus,
    Provider,
    SearchResult,
    SortOption,
    YouTubeMetadata,
)
from catalog_backend.queries.programs import SORT_COLUMNS, page_offset, resolve_sort


class InMemoryProgramStore:
    """Dict-backed `ProgramStore` enforcing the same unique constraints as `core.programs`."""

    def __init__(self, programs: list[Program] | None = None) -> None:
        self.rows: dict[str, Program] = {}
        self.saves: list[Program] = []
        for program in programs or []:
            self._insert(program)

    def _insert(self, program: Program) -> Program:
        now = datetime.now(timezone.utc)
        stored = replace(
            program,
            id=program.id or str(uuid.uuid4()),
            created_at=program.created_at or now,
            updated_at=program.updated_at or now,
        )
        self.rows[stored.id] = stored
        return stored

    def _check_unique(self, program: Program) -> None:
        for other in self.rows.values():
            if other.id == program.id:
                continue
            if other.slug == program.slug:
                raise ConflictError(f"duplicate slug {program.slug!r}")
            if (
                program.external_id
                and other.source_provider == program.source_provider
                and other.external_id == program.external_id
            ):
                raise ConflictError(f"duplicate external id {program.external_id!r}")

    def find_by_id(self, program_id: str) -> Program | None:
        program = self.rows.get(str(program_id))
        if program is None or program.is_deleted:
            return None
        return program

    def find_by_external_id(self, provider: Provider, external_id: str) -> Program | None:
        for program in self.rows.values():
            if program.source_provider == provider and program.external_id == external_id:
                return program
        return None

    def find_by_slug(self, slug: str) -> Program | None:
        for program in self.rows.values():
            if program.slug == slug:
                return program
        return None

    def find_latest_slug_suffix_match(self, base_slug: str) -> str | None:
        prefix = f"{base_slug}-"
        matches = [
            program.slug
            for program in self.rows.values()
            if program.slug.startswith(prefix) and program.slug[len(prefix):].isdigit()
        ]
        if not matches:
            return None
        return sorted(matches, key=lambda slug: (len(slug), slug), reverse=True)[0]

    def find_drafts_page(self, page: int, limit: int) -> tuple[list[Program], int]:
        drafts = [p for p in self.rows.values() if p.status == ProgramStatus.DRAFT and not p.is_deleted]
        drafts.sort(key=lambda p: p.created_at, reverse=True)
        offset = page_offset(page, limit)
        return drafts[offset : offset + limit], len(drafts)

    def create(self, **fields: Any) -> Program:
        fields.setdefault("language", Language.AR_SA)
        return Program(**fields)

    def save(self, program: Program) -> Program:
        self._check_unique(program)
        self.saves.append(program)
        if program.id is None:
            return self._insert(program)
        if program.id not in self.rows:
            raise NotFoundError(f"Program not found: {program.id}")
        stored = replace(program, updated_at=datetime.now(timezone.utc))
        self.rows[program.id] = stored
        return stored

    def soft_delete(self, program_id: str) -> None:
        program = self.find_by_id(program_id)
        if program is None:
            raise NotFoundError(f"Program not found: {program_id}")
        self.rows[program.id] = replace(
            program,
            status=ProgramStatus.ARCHIVED,
            deleted_at=datetime.now(timezone.utc),
        )

    def _public(self, lang: Language) -> list[Program]:
        return [
            p
            for p in self.rows.values()
            if p.status == ProgramStatus.PUBLISHED and not p.is_deleted and p.language == lang
        ]

    def find_published(self, program_id: str) -> Program | None:
        program = self.find_by_id(program_id)
        if program is None or program.status != ProgramStatus.PUBLISHED:
            return None
        return program

    def find_published_page(
        self,
        status: ProgramStatus,
        lang: Language,
        limit: int,
        offset: int,
        sort: SortOption | str,
    ) -> tuple[list[Program], int]:
        column, descending = SORT_COLUMNS[resolve_sort(sort)]
        rows = self._public(lang)
        rows.sort(key=lambda p: getattr(p, column), reverse=descending)
        return rows[offset : offset + limit], len(rows)

    def search_ranked(self, query: str, lang: Language, limit: int, offset: int) -> tuple[list[Program], int]:
        needle = (query or "").strip().lower()
        if not needle:
            return [], 0
        rows = [
            p
            for p in self._public(lang)
            if needle in p.title.lower() or needle in (p.description or "").lower()
        ]
        # Title hits rank above description-only hits.
        rows.sort(key=lambda p: (needle in p.title.lower(), p.published_at), reverse=True)
        return rows[offset : offset + limit], len(rows)

    def find_related(self, program_id: str, lang: Language, limit: int) -> list[Program]:
        return [p for p in self._public(lang) if p.id != program_id][:limit]


class FakeStrategy:
    """Provider strategy that records calls and returns canned payloads."""

    def __init__(
        self,
        *,
        results: list[SearchResult] | None = None,
        details: dict[str, ProgramDetails] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.results = results or []
        self.details = details or {}
        self.error = error
        self.search_calls: list[tuple[str, int]] = []
        self.fetch_calls: list[str] = []

    def search(self, query: str, limit: int = 10) -> list[SearchResult]:
        self.search_calls.append((query, limit))
        if self.error is not None:
            raise self.error
        return list(self.results[:limit])

    def fetch_details(self, external_id: str) -> ProgramDetails:
        self.fetch_calls.append(external_id)
        if self.error is not None:
            raise self.error
        try:
            return self.details[external_id]
        except KeyError:
            raise NotFoundError(f"Video not found: {external_id}") from None


def make_details(external_id: str = "abc123", *, title: str = "Video") -> ProgramDetails:
    return ProgramDetails(
        external_id=external_id,
        title=title,
        description=f"Description of {title}",
        duration_seconds=125,
        thumbnail=f"https://i.ytimg.com/vi/{external_id}/default.jpg",
        provider=Provider.YOUTUBE,
        source_metadata=YouTubeMetadata(
            video_id=external_id,
            channel="Thmanyah",
            uploaded_at="2024-01-15T10:00:00Z",
            view_count="1500",
            duration_iso="PT2M5S",
        ),
    )


def make_program(
    title: str = "Program",
    *,
    slug: str | None = None,
    status: ProgramStatus = ProgramStatus.PUBLISHED,
    language: Language = Language.AR_SA,
    published_at: datetime | None = None,
    duration_seconds: int = 60,
    external_id: str | None = None,
    **fields: Any,
) -> Program:
    if published_at is None and status == ProgramStatus.PUBLISHED:
        published_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return Program(
        title=title,
        slug=slug or title.lower().replace(" ", "-"),
        language=language,
        status=status,
        published_at=published_at,
        duration_seconds=duration_seconds,
        source_provider=Provider.YOUTUBE if external_id else None,
        external_id=external_id,
        **fields,
    )