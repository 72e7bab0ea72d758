"""
Domain models shared across scripts and services.
"""

from catalog_backend.models.programs import (
    Language,
    OpaqueMetadata,
    Program,
    ProgramCategory,
    ProgramDetails,
    ProgramStatus,
    Provider,
    SearchResult,
    SortOption,
    SourceMetadata,
    YouTubeMetadata,
    parse_source_metadata,
)

__all__ = [
    "Language",
    "OpaqueMetadata",
    "Program",
    "ProgramCategory",
    "ProgramDetails",
    "ProgramStatus",
    "Provider",
    "SearchResult",
    "SortOption",
    "SourceMetadata",
    "YouTubeMetadata",
    "parse_source_metadata",
]
