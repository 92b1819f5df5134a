"""
Shared movie catalog library code.

This package is intended to hold code that is reused across:
- the FastAPI app in `api/`
- operational scripts in `scripts/`

App entrypoints (FastAPI routers, CLI scripts) should live outside this package and
import from `movie_catalog` rather than the other way around.
"""
