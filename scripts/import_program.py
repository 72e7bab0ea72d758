#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from catalog_backend.cache.ephemeral import EphemeralCache  # noqa: E402
from catalog_backend.config import DEFAULT_SEARCH_LIMIT, MAX_PAGE_SIZE, get_settings  # noqa: E402
from catalog_backend.db.supabase import create_supabase_admin_client  # noqa: E402
from catalog_backend.errors import CatalogError  # noqa: E402
from catalog_backend.ingestion.program_importer import ProgramImporter  # noqa: E402
from catalog_backend.models.programs import Provider  # noqa: E402
from catalog_backend.providers import build_default_registry  # noqa: E402
from catalog_backend.repositories.programs import ProgramsRepository, assert_core_programs_table_exists  # noqa: E402
from catalog_backend.services.gateway import ExternalContentGateway  # noqa: E402
from catalog_backend.utils.env import load_env  # noqa: E402


def _env(name: str) -> str | None:
    value = (os.getenv(name) or "").strip()
    return value or None


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="import_program.py",
        description="Search an external provider or import one of its items into core.programs as a draft.",
    )
    parser.add_argument(
        "--provider",
        type=str,
        default=Provider.YOUTUBE.value,
        choices=[provider.value for provider in Provider],
        help="External content provider (default: YOUTUBE).",
    )
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--external-id", action="append", default=[], help="Provider item id to import (repeatable).")
    target.add_argument("--search", type=str, default=None, help="List provider items matching this query; no DB writes.")
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_SEARCH_LIMIT,
        help=f"Max search results (default: {DEFAULT_SEARCH_LIMIT}, max: {MAX_PAGE_SIZE}).",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def main(argv: list[str]) -> int:
    load_env()
    args = _parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not 1 <= args.limit <= MAX_PAGE_SIZE:
        print(f"--limit must be between 1 and {MAX_PAGE_SIZE}.", file=sys.stderr)
        return 2

    if not _env("YOUTUBE_API_KEY"):
        print("Missing required environment variable: YOUTUBE_API_KEY", file=sys.stderr)
        return 2

    settings = get_settings()
    gateway = ExternalContentGateway(cache=EphemeralCache(), registry=build_default_registry(settings))

    if args.search is not None:
        try:
            results = gateway.search(args.provider, args.search, args.limit)
        except CatalogError as exc:
            print(f"Search failed: {exc}", file=sys.stderr)
            return 1
        print(f"{len(results)} result(s) for {args.search!r}:")
        for result in results:
            print(f"  {result.external_id}\t{result.duration_seconds}s\t{result.title}")
        return 0

    missing = [key for key in ("SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY") if not _env(key)]
    if missing:
        print("Missing required environment variables:", ", ".join(missing), file=sys.stderr)
        return 2

    db = create_supabase_admin_client()
    try:
        assert_core_programs_table_exists(db)
    except CatalogError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    importer = ProgramImporter(
        store=ProgramsRepository(db, default_language=settings.default_language),
        gateway=gateway,
        default_language=settings.default_language,
    )

    failures = 0
    for external_id in args.external_id:
        external_id = external_id.strip()
        if not external_id:
            continue
        try:
            result = importer.import_with_result(args.provider, external_id)
        except CatalogError as exc:
            failures += 1
            print(f"FAILED {args.provider}:{external_id}: {exc}", file=sys.stderr)
            continue
        action = "CREATED" if result.created else "EXISTS"
        program = result.program
        print(f"{action} {args.provider}:{external_id} id={program.id} slug={program.slug} status={program.status.value}")

    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
