#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys

from supabase import Client

from movie_catalog.db.preflight import DatabasePreflightError, assert_movies_table_exists
from movie_catalog.db.supabase import create_supabase_admin_client
from movie_catalog.repositories.movies import MOVIE_SELECT_FIELDS, MOVIES_SCHEMA, MOVIES_TABLE
from movie_catalog.utils.env import load_env


def _report(label: str, ok: bool, details: str | None = None) -> bool:
    status = "PASS" if ok else "FAIL"
    suffix = f" ({details})" if details else ""
    print(f"{status}: {label}{suffix}")
    return ok


def _check_columns(db: Client) -> bool:
    columns = f"{MOVIE_SELECT_FIELDS},created_at"
    try:
        response = db.schema(MOVIES_SCHEMA).table(MOVIES_TABLE).select(columns).limit(1).execute()
    except Exception as exc:  # noqa: BLE001
        return _report(f"{MOVIES_SCHEMA}.{MOVIES_TABLE} columns", False, str(exc))
    error = getattr(response, "error", None)
    return _report(f"{MOVIES_SCHEMA}.{MOVIES_TABLE} columns", not error, str(error) if error else None)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="verify_schema",
        description=f"Check that {MOVIES_SCHEMA}.{MOVIES_TABLE} exists and exposes the catalog columns.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    _parse_args(argv if argv is not None else sys.argv[1:])
    load_env()

    try:
        db = create_supabase_admin_client()
    except RuntimeError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    try:
        assert_movies_table_exists(db)
    except DatabasePreflightError as exc:
        _report(f"{MOVIES_SCHEMA}.{MOVIES_TABLE} table exists", False)
        print(str(exc), file=sys.stderr)
        return 1
    _report(f"{MOVIES_SCHEMA}.{MOVIES_TABLE} table exists", True)

    return 0 if _check_columns(db) else 1


if __name__ == "__main__":
    raise SystemExit(main())
