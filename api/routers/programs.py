"""
Public discovery endpoints: home feed, ranked search, filter options,
related programs and program detail.

Only published, non-archived programs are visible here.
"""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, Response
from pydantic import BaseModel

from api.deps import Discovery, Settings
from catalog_backend.config import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_RELATED_LIMIT,
    DEFAULT_SEARCH_LIMIT,
    MAX_PAGE_SIZE,
    MAX_RELATED_LIMIT,
    MIN_PAGE,
    MIN_PAGE_SIZE,
)
from catalog_backend.models.programs import Language, SortOption


router = APIRouter(prefix="/programs", tags=["programs"])

FEED_CACHE_CONTROL = "public, s-maxage=60, stale-while-revalidate=300"
FILTERS_CACHE_CONTROL = "public, max-age=3600, stale-while-revalidate=7200"
RELATED_CACHE_CONTROL = "public, s-maxage=300, stale-while-revalidate=600"


# --- Pydantic models ---

class ProgramOut(BaseModel):
    id: UUID
    title: str
    slug: str
    description: str | None = None
    duration_seconds: int
    category: str | None = None
    thumbnail_url: str | None = None
    status: str
    published_at: datetime | None = None
    language: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProgramPage(BaseModel):
    data: list[ProgramOut]
    total: int


class FilterOptionsOut(BaseModel):
    languages: list[str]
    categories: list[str]
    sort_options: list[str]
    statuses: list[str]


# --- Endpoints ---

@router.get("", response_model=ProgramPage)
def home_feed(
    discovery: Discovery,
    settings: Settings,
    response: Response,
    page: int = Query(default=MIN_PAGE, ge=MIN_PAGE),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=MIN_PAGE_SIZE, le=MAX_PAGE_SIZE),
    sort: str = Query(default=SortOption.NEWEST.value),
    lang: Language | None = None,
) -> dict:
    """Paginated feed of published programs. Unknown sort values fall back to newest."""
    programs, total = discovery.home_feed(page, sort, lang or settings.default_language, limit)
    response.headers["Cache-Control"] = FEED_CACHE_CONTROL
    return {"data": [program.to_public_dict() for program in programs], "total": total}


@router.get("/search", response_model=ProgramPage)
def search_programs(
    discovery: Discovery,
    settings: Settings,
    response: Response,
    q: str = Query(..., min_length=1),
    limit: int = Query(default=DEFAULT_SEARCH_LIMIT, ge=MIN_PAGE_SIZE, le=MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
    lang: Language | None = None,
) -> dict:
    """Full-text search over published programs, best match first."""
    programs, total = discovery.search(q, lang or settings.default_language, limit, offset)
    response.headers["Cache-Control"] = FEED_CACHE_CONTROL
    return {"data": [program.to_public_dict() for program in programs], "total": total}


@router.get("/filters", response_model=FilterOptionsOut)
def get_filters(
    discovery: Discovery,
    settings: Settings,
    response: Response,
    lang: Language | None = None,
) -> dict:
    """Available filter values for the discovery UI."""
    options = discovery.filters(lang or settings.default_language)
    response.headers["Cache-Control"] = FILTERS_CACHE_CONTROL
    return options.to_dict()


@router.get("/{program_id}/related", response_model=list[ProgramOut])
def get_related(
    discovery: Discovery,
    program_id: UUID,
    response: Response,
    limit: int = Query(default=DEFAULT_RELATED_LIMIT, ge=MIN_PAGE_SIZE, le=MAX_RELATED_LIMIT),
) -> list[dict]:
    """Programs with similar titles in the same language."""
    programs = discovery.related(str(program_id), limit)
    response.headers["Cache-Control"] = RELATED_CACHE_CONTROL
    return [program.to_public_dict() for program in programs]


@router.get("/{program_id}", response_model=ProgramOut)
def get_program(discovery: Discovery, program_id: UUID, response: Response) -> dict:
    """Get a published program by ID."""
    program = discovery.find_by_id(str(program_id))
    if program is None:
        raise HTTPException(status_code=404, detail="Program not found")
    response.headers["Cache-Control"] = FEED_CACHE_CONTROL
    return program.to_public_dict()
