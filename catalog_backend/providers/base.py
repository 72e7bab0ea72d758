from __future__ import annotations

from typing import Protocol

from catalog_backend.models.programs import ProgramDetails, SearchResult


class ProviderStrategy(Protocol):
    """
    Contract every external content source implements.

    Implementations translate their native failures into `NotFoundError`
    (unknown external id) or `UpstreamUnavailableError` (anything else).
    """

    def search(self, query: str, limit: int) -> list[SearchResult]: ...

    def fetch_details(self, external_id: str) -> ProgramDetails: ...
