"""
Public (discovery) read operations: ranked search, home feed, single program,
related programs and filter options.

Only published, non-tombstoned programs are ever returned.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass

from catalog_backend.cache import keys as cache_keys
from catalog_backend.cache.ephemeral import EphemeralCache
from catalog_backend.config import (
    CACHE_TTL_ONE_HOUR,
    DEFAULT_PAGE_SIZE,
    DEFAULT_RELATED_LIMIT,
    DEFAULT_SEARCH_LIMIT,
)
from catalog_backend.models.programs import Language, Program, ProgramCategory, ProgramStatus, SortOption
from catalog_backend.queries.programs import page_offset, resolve_sort
from catalog_backend.repositories.base import ProgramStore


@dataclass(frozen=True)
class FilterOptions:
    languages: list[str]
    categories: list[str]
    sort_options: list[str]
    statuses: list[str]

    def to_dict(self) -> dict[str, list[str]]:
        return asdict(self)


class DiscoveryService:
    def __init__(self, *, store: ProgramStore, cache: EphemeralCache) -> None:
        self._store = store
        self._cache = cache

    def search(
        self,
        query: str,
        lang: Language = Language.AR_SA,
        limit: int = DEFAULT_SEARCH_LIMIT,
        offset: int = 0,
    ) -> tuple[list[Program], int]:
        return self._store.search_ranked(query, lang, limit, offset)

    def home_feed(
        self,
        page: int = 1,
        sort: SortOption | str = SortOption.NEWEST,
        lang: Language = Language.AR_SA,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> tuple[list[Program], int]:
        return self._store.find_published_page(
            ProgramStatus.PUBLISHED,
            lang,
            limit,
            page_offset(page, limit),
            resolve_sort(sort),
        )

    def find_by_id(self, program_id: str) -> Program | None:
        return self._store.find_published(program_id)

    def related(self, program_id: str, limit: int = DEFAULT_RELATED_LIMIT) -> list[Program]:
        program = self.find_by_id(program_id)
        if program is None:
            return []
        return self._store.find_related(program_id, program.language, limit)

    def filters(self, lang: Language = Language.AR_SA) -> FilterOptions:
        cache_key = cache_keys.filters(lang)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        # Static for now; the language argument only scopes the cache entry.
        options = FilterOptions(
            languages=[language.value for language in Language],
            categories=[category.value for category in ProgramCategory],
            sort_options=[option.value for option in SortOption],
            statuses=[ProgramStatus.PUBLISHED.value],
        )
        self._cache.set(cache_key, options, CACHE_TTL_ONE_HOUR)
        return options
