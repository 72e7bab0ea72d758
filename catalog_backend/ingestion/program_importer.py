from __future__ import annotations

import logging
from dataclasses import dataclass

from catalog_backend.models.programs import Language, Program, ProgramStatus, Provider
from catalog_backend.providers.registry import parse_provider
from catalog_backend.repositories.base import ProgramStore
from catalog_backend.services.gateway import ExternalContentGateway
from catalog_backend.utils.slugs import allocate_unique_slug

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgramImportResult:
    program: Program
    created: bool


class ProgramImporter:
    """
    Imports one external item as a DRAFT program.

    Idempotent per (provider, external id): an existing record, tombstoned or
    not, is returned unchanged without a provider fetch. There is no
    cross-request lock; concurrent imports of the same item or title are
    resolved by the store's unique constraints, which surface as
    `ConflictError` and are not retried here.
    """

    def __init__(
        self,
        *,
        store: ProgramStore,
        gateway: ExternalContentGateway,
        default_language: Language = Language.AR_SA,
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._default_language = default_language

    def import_program(self, provider: Provider | str, external_id: str) -> Program:
        return self.import_with_result(provider, external_id).program

    def import_with_result(self, provider: Provider | str, external_id: str) -> ProgramImportResult:
        provider = parse_provider(provider)

        existing = self._store.find_by_external_id(provider, external_id)
        if existing is not None:
            logger.info(f"SKIP program id={existing.id} source={provider.value}:{external_id} (already imported)")
            return ProgramImportResult(program=existing, created=False)

        details = self._gateway.fetch_details(provider, external_id)

        slug = allocate_unique_slug(
            details.title,
            find_by_slug=self._store.find_by_slug,
            find_latest_suffixed=self._store.find_latest_slug_suffix_match,
        )

        program = self._store.create(
            title=details.title,
            slug=slug,
            description=details.description,
            duration_seconds=details.duration_seconds,
            thumbnail_url=details.thumbnail or None,
            source_provider=provider,
            external_id=external_id,
            source_metadata=details.source_metadata,
            status=ProgramStatus.DRAFT,
            language=self._default_language,
        )
        saved = self._store.save(program)
        logger.info(f"CREATED program id={saved.id} slug={saved.slug!r} source={provider.value}:{external_id}")
        return ProgramImportResult(program=saved, created=True)
