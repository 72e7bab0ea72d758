from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_FILE_VARIABLE = "CATALOG_ENV_FILE"


def _env_candidates() -> list[Path]:
    explicit = (os.getenv(ENV_FILE_VARIABLE) or "").strip()
    if explicit:
        return [Path(explicit).expanduser()]
    repo_root = Path(__file__).resolve().parents[2]
    return [repo_root / ".env", Path.cwd() / ".env"]


def load_env(*, override: bool = False) -> Path | None:
    """
    Load settings from a dotenv file into the process environment.

    `CATALOG_ENV_FILE` names the file explicitly; otherwise the first `.env`
    at the repo root or the working directory is used. Returns the loaded
    path, or None when no file exists.
    """
    for path in _env_candidates():
        if path.is_file():
            load_dotenv(dotenv_path=path, override=override)
            logger.debug(f"Loaded environment from {path}")
            return path
    return None
