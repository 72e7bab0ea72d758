from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from supabase import Client

from catalog_backend.db.postgrest_errors import error_text, is_missing_relation, is_unique_violation
from catalog_backend.errors import CatalogError, ConflictError, NotFoundError
from catalog_backend.models.programs import Language, Program, ProgramStatus, Provider, SortOption
from catalog_backend.queries.programs import (
    apply_public_filters,
    apply_range,
    apply_sorting,
    page_offset,
    ranked_search_params,
    related_params,
    search_count_params,
)

logger = logging.getLogger(__name__)

SCHEMA = "core"
TABLE = "programs"


class ProgramRepositoryError(CatalogError):
    pass


def assert_core_programs_table_exists(db: Client) -> None:
    """
    Fail fast with a clear error if `core.programs` is missing in Supabase.

    This avoids confusing downstream failures when running import jobs.
    """

    help_message = (
        "Database table `core.programs` is missing. "
        "Run `supabase db push` to apply migrations (see `supabase/migrations/0001_core_programs.sql`), "
        "then re-run the import job."
    )

    try:
        response = db.schema(SCHEMA).table(TABLE).select("id").limit(1).execute()
    except Exception as exc:
        if is_missing_relation(exc):
            raise ProgramRepositoryError(help_message) from exc
        raise ProgramRepositoryError(f"Supabase error during core.programs preflight: {exc}") from exc

    error = getattr(response, "error", None)
    if not error:
        return
    if is_missing_relation(error):
        raise ProgramRepositoryError(help_message)
    raise ProgramRepositoryError(f"Supabase error during core.programs preflight: {error_text(error)}")


def _raise_for_supabase_error(response: Any, context: str) -> None:
    error = getattr(response, "error", None)
    if not error:
        return
    if is_unique_violation(error):
        raise ConflictError(f"Unique constraint violated while {context}: {error_text(error)}")
    raise ProgramRepositoryError(f"Supabase error during {context}: {error_text(error)}")


def _execute(builder: Any, context: str) -> Any:
    try:
        response = builder.execute()
    except Exception as exc:
        if is_unique_violation(exc):
            raise ConflictError(f"Unique constraint violated while {context}: {exc}") from exc
        raise ProgramRepositoryError(f"Supabase error during {context}: {exc}") from exc
    _raise_for_supabase_error(response, context)
    return response


def _rows(response: Any) -> list[dict[str, Any]]:
    data = response.data or []
    if isinstance(data, dict):
        return [data]
    return [row for row in data if isinstance(row, dict)] if isinstance(data, list) else []


def _total(response: Any, rows: list[dict[str, Any]]) -> int:
    count = getattr(response, "count", None)
    return int(count) if isinstance(count, int) else len(rows)


class ProgramsRepository:
    """
    `ProgramStore` backed by the `core.programs` table through PostgREST.

    Slug and provider/external-id lookups include tombstoned rows because the
    unique constraints cover them too.
    """

    def __init__(self, db: Client, *, default_language: Language = Language.AR_SA) -> None:
        self._db = db
        self._default_language = default_language

    def _table(self) -> Any:
        return self._db.schema(SCHEMA).table(TABLE)

    def _to_program(self, row: dict[str, Any]) -> Program:
        return Program.from_row(row, default_language=self._default_language)

    def _first(self, response: Any) -> Program | None:
        rows = _rows(response)
        return self._to_program(rows[0]) if rows else None

    def find_by_id(self, program_id: str, *, include_deleted: bool = False) -> Program | None:
        query = self._table().select("*").eq("id", str(program_id))
        if not include_deleted:
            query = query.is_("deleted_at", "null")
        return self._first(_execute(query.limit(1), "finding program by id"))

    def find_by_external_id(self, provider: Provider, external_id: str) -> Program | None:
        query = (
            self._table()
            .select("*")
            .eq("source_provider", provider.value)
            .eq("external_id", external_id)
            .limit(1)
        )
        return self._first(_execute(query, "finding program by external id"))

    def find_by_slug(self, slug: str) -> Program | None:
        query = self._table().select("*").eq("slug", slug).limit(1)
        return self._first(_execute(query, "finding program by slug"))

    def find_latest_slug_suffix_match(self, base_slug: str) -> str | None:
        response = _execute(
            self._db.schema(SCHEMA).rpc("latest_program_slug_suffix", {"p_base_slug": base_slug}),
            "finding latest slug suffix",
        )
        data = response.data
        if isinstance(data, list):
            data = data[0] if data else None
        if isinstance(data, dict):
            data = data.get("slug") or data.get("latest_program_slug_suffix")
        return data if isinstance(data, str) and data else None

    def find_drafts_page(self, page: int, limit: int) -> tuple[list[Program], int]:
        query = (
            self._table()
            .select("*", count="exact")
            .eq("status", ProgramStatus.DRAFT.value)
            .is_("deleted_at", "null")
            .order("created_at", desc=True)
        )
        query = apply_range(query, limit=limit, offset=page_offset(page, limit))
        response = _execute(query, "listing draft programs")
        rows = _rows(response)
        return [self._to_program(row) for row in rows], _total(response, rows)

    def create(self, **fields: Any) -> Program:
        fields.setdefault("language", self._default_language)
        return Program(**fields)

    def save(self, program: Program) -> Program:
        payload = program.to_row()
        if program.id is None:
            response = _execute(self._table().insert(payload), "inserting program")
            saved = self._first(response)
            if saved is None:
                raise ProgramRepositoryError("Supabase insert returned no data for program.")
            logger.info(f"Inserted program id={saved.id} slug={saved.slug!r}")
            return saved

        payload["updated_at"] = datetime.now(timezone.utc).isoformat()
        response = _execute(self._table().update(payload).eq("id", program.id), "updating program")
        saved = self._first(response)
        if saved is None:
            raise NotFoundError(f"Program not found: {program.id}")
        return saved

    def soft_delete(self, program_id: str) -> None:
        now = datetime.now(timezone.utc).isoformat()
        query = (
            self._table()
            .update({"deleted_at": now, "status": ProgramStatus.ARCHIVED.value, "updated_at": now})
            .eq("id", str(program_id))
            .is_("deleted_at", "null")
        )
        if not _rows(_execute(query, "archiving program")):
            raise NotFoundError(f"Program not found: {program_id}")
        logger.info(f"Archived program id={program_id}")

    def find_published(self, program_id: str) -> Program | None:
        query = self._table().select("*").eq("id", str(program_id))
        query = query.eq("status", ProgramStatus.PUBLISHED.value).is_("deleted_at", "null").limit(1)
        return self._first(_execute(query, "finding published program"))

    def find_published_page(
        self,
        status: ProgramStatus,
        lang: Language,
        limit: int,
        offset: int,
        sort: SortOption | str,
    ) -> tuple[list[Program], int]:
        query = apply_public_filters(self._table().select("*", count="exact"), lang, status)
        query = apply_sorting(query, sort)
        query = apply_range(query, limit=limit, offset=offset)
        response = _execute(query, "listing published programs")
        rows = _rows(response)
        return [self._to_program(row) for row in rows], _total(response, rows)

    def search_ranked(self, query: str, lang: Language, limit: int, offset: int) -> tuple[list[Program], int]:
        if not (query or "").strip():
            return [], 0
        response = _execute(
            self._db.schema(SCHEMA).rpc("search_programs", ranked_search_params(query, lang, limit=limit, offset=offset)),
            "searching programs",
        )
        rows = _rows(response)
        if rows:
            total = int(rows[0].get("total_count") or 0)
        elif offset > 0:
            total = self._count_search_matches(query, lang)
        else:
            total = 0
        return [self._to_program(row) for row in rows], total

    def _count_search_matches(self, query: str, lang: Language) -> int:
        # An empty page past the end carries no total_count column.
        response = _execute(
            self._db.schema(SCHEMA).rpc("count_search_programs", search_count_params(query, lang)),
            "counting search matches",
        )
        data = response.data
        if isinstance(data, list):
            data = data[0] if data else None
        if isinstance(data, dict):
            data = data.get("count_search_programs", data.get("count"))
        return int(data or 0)

    def find_related(self, program_id: str, lang: Language, limit: int) -> list[Program]:
        response = _execute(
            self._db.schema(SCHEMA).rpc("related_programs", related_params(program_id, lang, limit=limit)),
            "finding related programs",
        )
        return [self._to_program(row) for row in _rows(response)]
