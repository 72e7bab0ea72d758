"""
Error taxonomy shared by the import path and the public read path.

Every component raises one of these kinds; provider-native and store-native
errors are translated before they leave the provider strategy or repository.
"""
from __future__ import annotations


class CatalogError(RuntimeError):
    """Base class for catalog errors surfaced to callers."""

    pass


class NotFoundError(CatalogError):
    """An identifier or external id does not resolve."""

    pass


class InvalidRequestError(CatalogError):
    """The request cannot be honored as given. No state was mutated."""

    pass


class UnsupportedProviderError(InvalidRequestError):
    def __init__(self, provider: object) -> None:
        super().__init__(f"Unsupported provider: {provider}")
        self.provider = provider


class UpstreamUnavailableError(CatalogError):
    """A provider call failed for a reason other than a missing resource."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


ProviderUnavailableError = UpstreamUnavailableError


class ConflictError(CatalogError):
    """A unique constraint (slug or provider/external id) rejected a write."""

    pass
