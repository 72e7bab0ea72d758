"""
URL-safe slug generation with full Unicode support.

`normalize_slug` keeps Unicode letters and digits (Arabic titles stay Arabic),
so slugs are readable in every catalog language.

Examples:
    normalize_slug("بودكاست فنجان")     -> "بودكاست-فنجان"
    normalize_slug("Hello World!")      -> "hello-world"
    normalize_slug("  Test___Slug  ")   -> "test-slug"
"""
from __future__ import annotations

import re
import unicodedata
from typing import Any, Callable

MAX_SLUG_LENGTH = 255

# "-" plus up to ten digits.
MAX_SUFFIX_LENGTH = 11

# Base used when a title has no letters or digits at all.
FALLBACK_SLUG_BASE = "untitled"

_SEPARATOR_RE = re.compile(r"[\s_]+")
_HYPHEN_RUN_RE = re.compile(r"-+")
_NUMERIC_SUFFIX_RE = re.compile(r"-([0-9]+)$")


def _is_kept(ch: str) -> bool:
    if ch in "_-" or ch.isspace():
        return True
    category = unicodedata.category(ch)
    return category.startswith("L") or category.startswith("N")


def normalize_slug(title: str) -> str:
    """
    Convert a title to a slug.

    Pure and total: symbol-only or empty input yields "".
    """
    lowered = (title or "").lower().strip()
    kept = "".join(ch for ch in lowered if _is_kept(ch))
    slug = _SEPARATOR_RE.sub("-", kept)
    slug = _HYPHEN_RUN_RE.sub("-", slug)
    slug = slug.strip("-")
    # Truncation can expose a hyphen at the cut point.
    return slug[:MAX_SLUG_LENGTH].rstrip("-")


def suffix_stem(base: str) -> str:
    """
    Prefix that numbered variants of `base` are built on.

    Long bases are cut once, leaving room for any suffix, so `<stem>-<n>` stays
    within `MAX_SLUG_LENGTH` and every numbered variant shares the same stem.
    """
    if len(base) <= MAX_SLUG_LENGTH - MAX_SUFFIX_LENGTH:
        return base
    return base[: MAX_SLUG_LENGTH - MAX_SUFFIX_LENGTH].rstrip("-")


def parse_slug_suffix(slug: str) -> int | None:
    match = _NUMERIC_SUFFIX_RE.search(slug or "")
    if match is None:
        return None
    return int(match.group(1))


def allocate_unique_slug(
    title: str,
    *,
    find_by_slug: Callable[[str], Any | None],
    find_latest_suffixed: Callable[[str], str | None],
) -> str:
    """
    Return a slug for `title` that no stored record uses yet.

    Uses at most two lookups: an exact match on the base slug, then the
    greatest `<stem>-<digits>` slug (longest first, then lexicographic), where
    the stem is the base cut short enough to take a suffix. This is
    not race-free; the store's unique constraint is the final arbiter and a
    violation there surfaces as a conflict to the caller.
    """
    base = normalize_slug(title) or FALLBACK_SLUG_BASE

    if find_by_slug(base) is None:
        return base

    stem = suffix_stem(base)
    latest = find_latest_suffixed(stem)
    current = parse_slug_suffix(latest) if latest else None
    return f"{stem}-{(current or 0) + 1}"
