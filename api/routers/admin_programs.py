"""
Admin CMS endpoints: search external providers, import, review drafts,
edit, publish and archive programs.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Query, Response
from pydantic import BaseModel, ConfigDict, Field

from api.deps import Cms
from catalog_backend.config import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_SEARCH_LIMIT,
    MAX_PAGE_SIZE,
    MIN_PAGE,
    MIN_PAGE_SIZE,
)
from catalog_backend.models.programs import Language, ProgramCategory, Provider


router = APIRouter(prefix="/admin/programs", tags=["admin"])


# --- Pydantic models ---

class SearchExternalRequest(BaseModel):
    provider: Provider
    q: str = Field(..., min_length=1)
    limit: int = Field(default=DEFAULT_SEARCH_LIMIT, ge=MIN_PAGE_SIZE, le=MAX_PAGE_SIZE)


class SearchResultOut(BaseModel):
    external_id: str
    title: str
    thumbnail: str
    duration_seconds: int
    provider: Provider


class ImportProgramRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    provider: Provider
    external_id: str = Field(..., min_length=1, alias="externalId")


class UpdateProgramRequest(BaseModel):
    title: str | None = None
    description: str | None = None
    duration_seconds: int | None = Field(default=None, ge=0)
    language: Language | None = None
    category: ProgramCategory | None = None
    thumbnail_url: str | None = None
    source_metadata: dict[str, Any] | None = None


class AdminProgramOut(BaseModel):
    id: UUID
    title: str
    slug: str
    description: str | None = None
    duration_seconds: int
    category: str | None = None
    thumbnail_url: str | None = None
    status: str
    published_at: datetime | None = None
    deleted_at: datetime | None = None
    language: str
    source_provider: str | None = None
    external_id: str | None = None
    source_metadata: dict[str, Any]
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AdminProgramPage(BaseModel):
    data: list[AdminProgramOut]
    total: int


# --- Endpoints ---

@router.post("/integrations/search", response_model=list[SearchResultOut])
def search_external(cms: Cms, body: SearchExternalRequest) -> list[dict]:
    """Search an external provider for importable items."""
    results = cms.search_external(body.provider, body.q, body.limit)
    return [
        {
            "external_id": result.external_id,
            "title": result.title,
            "thumbnail": result.thumbnail,
            "duration_seconds": result.duration_seconds,
            "provider": result.provider,
        }
        for result in results
    ]


@router.post("/import", response_model=AdminProgramOut, status_code=201)
def import_program(cms: Cms, body: ImportProgramRequest) -> dict:
    """Import an external item as a draft. Returns the existing record if already imported."""
    return cms.import_program(body.provider, body.external_id).to_admin_dict()


@router.get("", response_model=AdminProgramPage)
def list_drafts(
    cms: Cms,
    page: int = Query(default=MIN_PAGE, ge=MIN_PAGE),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=MIN_PAGE_SIZE, le=MAX_PAGE_SIZE),
) -> dict:
    """List draft programs, newest first."""
    programs, total = cms.list_drafts(page, limit)
    return {"data": [program.to_admin_dict() for program in programs], "total": total}


@router.get("/{program_id}", response_model=AdminProgramOut)
def get_program(cms: Cms, program_id: UUID) -> dict:
    return cms.get_editor_view(str(program_id)).to_admin_dict()


@router.patch("/{program_id}", response_model=AdminProgramOut)
def update_program(cms: Cms, program_id: UUID, body: UpdateProgramRequest) -> dict:
    """Apply the supplied fields; omitted fields are left untouched."""
    changes = body.model_dump(exclude_unset=True)
    return cms.update_program(str(program_id), changes).to_admin_dict()


@router.put("/{program_id}/publish", response_model=AdminProgramOut)
def publish_program(cms: Cms, program_id: UUID) -> dict:
    return cms.publish_program(str(program_id)).to_admin_dict()


@router.delete("/{program_id}", status_code=204)
def archive_program(cms: Cms, program_id: UUID) -> Response:
    """Archive (soft-delete) a program."""
    cms.archive_program(str(program_id))
    return Response(status_code=204)
