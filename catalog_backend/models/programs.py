from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Union


class Provider(str, Enum):
    YOUTUBE = "YOUTUBE"


class Language(str, Enum):
    AR_SA = "ar-SA"
    EN_US = "en-US"
    FR_FR = "fr-FR"


class ProgramStatus(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class ProgramCategory(str, Enum):
    PODCAST = "PODCAST"
    DOCUMENTARY = "DOCUMENTARY"
    SERIES = "SERIES"
    INTERVIEW = "INTERVIEW"
    EDUCATIONAL = "EDUCATIONAL"
    NEWS = "NEWS"
    ENTERTAINMENT = "ENTERTAINMENT"


class SortOption(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    DURATION = "duration"


@dataclass(frozen=True)
class YouTubeMetadata:
    video_id: str
    channel: str = ""
    uploaded_at: str | None = None  # ISO 8601 upload timestamp
    view_count: str = "0"  # YouTube returns large counts as strings
    duration_iso: str | None = None

    def to_json(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "video_id": self.video_id,
            "channel": self.channel,
            "uploaded_at": self.uploaded_at,
            "view_count": self.view_count,
        }
        if self.duration_iso is not None:
            payload["duration_iso"] = self.duration_iso
        return payload


@dataclass(frozen=True)
class OpaqueMetadata:
    """Metadata for providers whose payload shape is not modeled."""

    payload: Mapping[str, Any] = field(default_factory=dict)

    def to_json(self) -> dict[str, Any]:
        return dict(self.payload)


SourceMetadata = Union[YouTubeMetadata, OpaqueMetadata]


def parse_source_metadata(provider: Provider | str | None, payload: Mapping[str, Any] | None) -> SourceMetadata:
    """
    Decode a `source_metadata` jsonb payload into the variant for `provider`.

    Payloads that do not carry the fields a modeled provider needs fall back to
    `OpaqueMetadata` instead of failing.
    """
    data = dict(payload or {})
    tag = provider.value if isinstance(provider, Provider) else provider
    if tag == Provider.YOUTUBE.value:
        video_id = data.get("video_id")
        if isinstance(video_id, str) and video_id:
            return YouTubeMetadata(
                video_id=video_id,
                channel=str(data.get("channel") or ""),
                uploaded_at=data.get("uploaded_at") if isinstance(data.get("uploaded_at"), str) else None,
                view_count=str(data.get("view_count") or "0"),
                duration_iso=data.get("duration_iso") if isinstance(data.get("duration_iso"), str) else None,
            )
    return OpaqueMetadata(payload=data)


@dataclass(frozen=True)
class SearchResult:
    external_id: str
    title: str
    thumbnail: str
    duration_seconds: int
    provider: Provider


@dataclass(frozen=True)
class ProgramDetails:
    external_id: str
    title: str
    description: str
    duration_seconds: int
    thumbnail: str
    provider: Provider
    source_metadata: SourceMetadata = field(default_factory=OpaqueMetadata)


def _parse_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(raw)
        except ValueError:
            return None
    return None


def _parse_enum(enum_cls: type[Enum], value: Any) -> Any:
    if value is None or value == "":
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class Program:
    """
    Canonical program record (maps to `core.programs`).

    `id` is None until the store has persisted the record. The search vector
    column is maintained by the database and is never carried here.
    """

    title: str
    slug: str
    language: Language
    id: str | None = None
    description: str | None = None
    duration_seconds: int = 0
    category: ProgramCategory | None = None
    thumbnail_url: str | None = None
    status: ProgramStatus = ProgramStatus.DRAFT
    published_at: datetime | None = None
    deleted_at: datetime | None = None
    source_provider: Provider | None = None
    external_id: str | None = None
    source_metadata: SourceMetadata = field(default_factory=OpaqueMetadata)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @classmethod
    def from_row(cls, row: Mapping[str, Any], *, default_language: Language = Language.AR_SA) -> Program:
        provider = _parse_enum(Provider, row.get("source_provider"))
        metadata = row.get("source_metadata")
        return cls(
            id=str(row["id"]) if row.get("id") is not None else None,
            title=str(row.get("title") or ""),
            slug=str(row.get("slug") or ""),
            description=row.get("description") if isinstance(row.get("description"), str) else None,
            duration_seconds=int(row.get("duration_seconds") or 0),
            category=_parse_enum(ProgramCategory, row.get("category")),
            thumbnail_url=row.get("thumbnail_url") if isinstance(row.get("thumbnail_url"), str) else None,
            status=_parse_enum(ProgramStatus, row.get("status")) or ProgramStatus.DRAFT,
            published_at=_parse_timestamp(row.get("published_at")),
            deleted_at=_parse_timestamp(row.get("deleted_at")),
            language=_parse_enum(Language, row.get("language")) or default_language,
            source_provider=provider,
            external_id=row.get("external_id") if isinstance(row.get("external_id"), str) else None,
            source_metadata=parse_source_metadata(provider, metadata if isinstance(metadata, Mapping) else None),
            created_at=_parse_timestamp(row.get("created_at")),
            updated_at=_parse_timestamp(row.get("updated_at")),
        )

    def to_row(self) -> dict[str, Any]:
        """
        Serialize to a PostgREST payload.

        Store-assigned columns (`id`, `created_at`, `updated_at`) are left out.
        """
        return {
            "title": self.title,
            "slug": self.slug,
            "description": self.description,
            "duration_seconds": int(self.duration_seconds),
            "category": self.category.value if self.category else None,
            "thumbnail_url": self.thumbnail_url,
            "status": self.status.value,
            "published_at": self.published_at.isoformat() if self.published_at else None,
            "deleted_at": self.deleted_at.isoformat() if self.deleted_at else None,
            "language": self.language.value,
            "source_provider": self.source_provider.value if self.source_provider else None,
            "external_id": self.external_id,
            "source_metadata": self.source_metadata.to_json(),
        }

    def to_public_dict(self) -> dict[str, Any]:
        """Public read shape: provenance and tombstone stay admin-only."""
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "description": self.description,
            "duration_seconds": self.duration_seconds,
            "category": self.category.value if self.category else None,
            "thumbnail_url": self.thumbnail_url,
            "status": self.status.value,
            "published_at": self.published_at,
            "language": self.language.value,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def to_admin_dict(self) -> dict[str, Any]:
        return {
            **self.to_public_dict(),
            "deleted_at": self.deleted_at,
            "source_provider": self.source_provider.value if self.source_provider else None,
            "external_id": self.external_id,
            "source_metadata": self.source_metadata.to_json(),
        }
