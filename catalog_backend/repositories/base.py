from __future__ import annotations

from typing import Any, Protocol

from catalog_backend.models.programs import Language, Program, ProgramStatus, Provider, SortOption


class ProgramStore(Protocol):
    """
    Persistence contract for programs.

    Pages are returned as `(items, total)` pairs. Public reads (`find_published*`,
    `search_ranked`, `find_related`) only ever return published, non-tombstoned
    rows. Unique-constraint violations on `save` raise `ConflictError`.
    """

    def find_by_id(self, program_id: str) -> Program | None: ...

    def find_by_external_id(self, provider: Provider, external_id: str) -> Program | None: ...

    def find_by_slug(self, slug: str) -> Program | None: ...

    def find_latest_slug_suffix_match(self, base_slug: str) -> str | None: ...

    def find_drafts_page(self, page: int, limit: int) -> tuple[list[Program], int]: ...

    def create(self, **fields: Any) -> Program: ...

    def save(self, program: Program) -> Program: ...

    def soft_delete(self, program_id: str) -> None: ...

    def find_published(self, program_id: str) -> Program | None: ...

    def find_published_page(
        self,
        status: ProgramStatus,
        lang: Language,
        limit: int,
        offset: int,
        sort: SortOption | str,
    ) -> tuple[list[Program], int]: ...

    def search_ranked(self, query: str, lang: Language, limit: int, offset: int) -> tuple[list[Program], int]: ...

    def find_related(self, program_id: str, lang: Language, limit: int) -> list[Program]: ...
