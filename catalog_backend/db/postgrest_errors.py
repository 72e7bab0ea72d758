"""
Classification of PostgREST / Postgres errors raised through the Supabase client.
"""
from __future__ import annotations

from typing import Any

UNIQUE_VIOLATION = "23505"
UNDEFINED_TABLE = "42P01"


def error_text(error: Any) -> str:
    """Flatten an exception or a response `error` object into one string."""
    parts = [
        str(getattr(error, "code", "") or ""),
        str(getattr(error, "message", "") or ""),
        str(getattr(error, "details", "") or ""),
        str(getattr(error, "hint", "") or ""),
        str(error),
    ]
    return " ".join([p for p in parts if p]).strip()


def is_unique_violation(error: Any) -> bool:
    if str(getattr(error, "code", "") or "") == UNIQUE_VIOLATION:
        return True
    text = error_text(error).casefold()
    return UNIQUE_VIOLATION in text or "duplicate key value violates unique constraint" in text


def is_missing_relation(error: Any) -> bool:
    msg = error_text(error).casefold()
    return (
        UNDEFINED_TABLE.casefold() in msg
        or "pgrst205" in msg  # postgrest: relation not found in schema cache
        or ("relation" in msg and "does not exist" in msg)
        or ("schema cache" in msg and "programs" in msg)
        or ("could not find" in msg and "relation" in msg)
    )
