#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import os
import sys

import uvicorn

from movie_catalog.utils.env import load_env

DEFAULT_PORT = 8080


def _default_port() -> int:
    raw = (os.getenv("PORT") or "").strip()
    return int(raw) if raw.isdigit() else DEFAULT_PORT


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="run_api",
        description="Run the Movie Catalog API with uvicorn.",
    )
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"), help="Bind host (default: $HOST or 0.0.0.0).")
    parser.add_argument("--port", type=int, default=_default_port(), help="Bind port (default: $PORT or 8080).")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (local development).")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["critical", "error", "warning", "info", "debug"],
        help="Log level for the app and uvicorn.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    load_env()
    args = _parse_args(argv if argv is not None else sys.argv[1:])

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
