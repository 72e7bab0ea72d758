"""
Query shapes for public program reads.

Every public read goes through `apply_public_filters`, so the published /
not-tombstoned / language predicate is applied by construction rather than
repeated per query. Bounds on `page` / `limit` are the boundary layer's job;
nothing here clamps them.
"""
from __future__ import annotations

from typing import Any, Mapping, TypeVar

from catalog_backend.models.programs import Language, ProgramStatus, SortOption

Q = TypeVar("Q")

# sort option -> (column, descending)
SORT_COLUMNS: Mapping[SortOption, tuple[str, bool]] = {
    SortOption.NEWEST: ("published_at", True),
    SortOption.OLDEST: ("published_at", False),
    SortOption.DURATION: ("duration_seconds", True),
}

DEFAULT_SORT = SortOption.NEWEST


def resolve_sort(sort: SortOption | str | None) -> SortOption:
    """Unrecognized sort names fall back to `newest`."""
    if isinstance(sort, SortOption):
        return sort
    try:
        return SortOption(str(sort or "").strip().lower())
    except ValueError:
        return DEFAULT_SORT


def apply_public_filters(query: Q, lang: Language, status: ProgramStatus = ProgramStatus.PUBLISHED) -> Q:
    return query.eq("status", status.value).is_("deleted_at", "null").eq("language", lang.value)


def apply_sorting(query: Q, sort: SortOption | str | None) -> Q:
    column, descending = SORT_COLUMNS[resolve_sort(sort)]
    return query.order(column, desc=descending)


def page_offset(page: int, limit: int) -> int:
    """1-based page number to row offset."""
    return (page - 1) * limit


def apply_range(query: Q, *, limit: int, offset: int) -> Q:
    # PostgREST ranges are inclusive on both ends.
    return query.range(offset, offset + limit - 1)


def ranked_search_params(query: str, lang: Language, *, limit: int, offset: int) -> dict[str, Any]:
    """
    Parameters for the `core.search_programs` RPC.

    The function applies the public predicate, ranks with `ts_rank` in the
    language's text-search configuration and orders by rank, then
    `published_at`, both descending.
    """
    return {
        "p_query": query,
        "p_language": lang.value,
        "p_limit": int(limit),
        "p_offset": int(offset),
    }


def search_count_params(query: str, lang: Language) -> dict[str, Any]:
    """Parameters for the `core.count_search_programs` RPC; same predicate as `ranked_search_params`."""
    return {"p_query": query, "p_language": lang.value}


def related_params(program_id: str, lang: Language, *, limit: int) -> dict[str, Any]:
    """
    Parameters for the `core.related_programs` RPC.

    Candidates share the language, are public, exclude `program_id`, and are
    ordered by trigram similarity to the current title.
    """
    return {
        "p_program_id": str(program_id),
        "p_language": lang.value,
        "p_limit": int(limit),
    }
