"""
Ingestion of external provider content into the catalog.
"""

from catalog_backend.ingestion.program_importer import ProgramImporter, ProgramImportResult

__all__ = [
    "ProgramImportResult",
    "ProgramImporter",
]
