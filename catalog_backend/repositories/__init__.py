"""
Repository layer for DB access patterns.
"""

from catalog_backend.repositories.base import ProgramStore
from catalog_backend.repositories.programs import (
    ProgramRepositoryError,
    ProgramsRepository,
    assert_core_programs_table_exists,
)

__all__ = [
    "ProgramRepositoryError",
    "ProgramStore",
    "ProgramsRepository",
    "assert_core_programs_table_exists",
]
