from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

ENV_FILE_OVERRIDE = "MOVIE_CATALOG_ENV_FILE"


def _candidate_env_files(env_file: str | Path | None) -> list[Path]:
    explicit = env_file or os.getenv(ENV_FILE_OVERRIDE)
    if explicit:
        # An explicit file replaces the search; a typo should not fall through to another .env.
        return [Path(explicit).expanduser()]
    repo_root = Path(__file__).resolve().parents[2]
    return [repo_root / ".env", Path.cwd() / ".env"]


def load_env(*, env_file: str | Path | None = None, override: bool = False) -> Path | None:
    """
    Load catalog settings from a dotenv file and return the file used.

    `env_file` (or $MOVIE_CATALOG_ENV_FILE) names the file directly. Otherwise the
    repo-root `.env` wins over one in the working directory. Variables already set in
    the process environment are kept unless `override` is true.
    """

    for path in _candidate_env_files(env_file):
        if path.is_file():
            load_dotenv(dotenv_path=path, override=override)
            return path
    return None
