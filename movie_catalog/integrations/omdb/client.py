from __future__ import annotations

import logging
import os
from typing import Any, Mapping

import requests

from movie_catalog.models.movies import PLACEHOLDER_POSTER_URL

logger = logging.getLogger(__name__)

OMDB_API_BASE_URL = "https://www.omdbapi.com/"

# OMDb reports a missing poster with this literal instead of omitting the field.
OMDB_NOT_AVAILABLE = "N/A"


class OmdbClientError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, body_snippet: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_snippet = body_snippet


def _require_api_key(api_key: str | None) -> str:
    resolved = (api_key or os.getenv("OMDB_API_KEY") or "").strip()
    if not resolved:
        raise RuntimeError("OMDB_API_KEY is not set.")
    return resolved


def resolve_api_key(api_key: str | None = None) -> str | None:
    """
    Best-effort API key resolution for callers that want to continue when the key is missing.
    """

    resolved = (api_key or os.getenv("OMDB_API_KEY") or "").strip()
    return resolved or None


def _request_json(
    session: requests.Session,
    url: str,
    *,
    params: Mapping[str, Any] | None = None,
    timeout_seconds: float | None = None,
) -> dict[str, Any]:
    headers = {"accept": "application/json"}

    # Single attempt: a failed lookup degrades to the placeholder instead of being retried.
    try:
        resp = session.get(url, params=params, headers=headers, timeout=timeout_seconds)
    except requests.RequestException as exc:
        raise OmdbClientError(f"OMDb request failed: {exc}") from exc

    if resp.status_code != 200:
        raise OmdbClientError(
            f"OMDb request failed with HTTP {resp.status_code}.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        )

    try:
        payload = resp.json()
    except ValueError as exc:
        raise OmdbClientError(
            "OMDb returned non-JSON response.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        ) from exc

    if not isinstance(payload, dict):
        raise OmdbClientError("OMDb returned unexpected JSON shape (not an object).")
    return payload


def fetch_title(
    title: str,
    *,
    api_key: str | None = None,
    session: requests.Session | None = None,
    timeout_seconds: float | None = None,
) -> dict[str, Any]:
    """
    Fetch the OMDb title payload for an exact title match (`?t=`).

    Returns the full JSON object. OMDb answers unknown titles with HTTP 200 and
    `{"Response": "False", "Error": "..."}`; that case is raised as OmdbClientError.
    """

    api_key = _require_api_key(api_key)
    session = session or requests.Session()
    payload = _request_json(
        session,
        OMDB_API_BASE_URL,
        params={"t": title, "apikey": api_key},
        timeout_seconds=timeout_seconds,
    )
    if str(payload.get("Response", "True")).casefold() == "false":
        raise OmdbClientError(f"OMDb lookup failed: {payload.get('Error') or 'unknown error'}")
    return payload


def extract_poster_url(payload: Mapping[str, Any]) -> str | None:
    poster = payload.get("Poster")
    if not isinstance(poster, str):
        return None
    poster = poster.strip()
    if not poster or poster == OMDB_NOT_AVAILABLE:
        return None
    return poster


def fetch_poster_url(
    title: str,
    *,
    api_key: str | None = None,
    session: requests.Session | None = None,
    timeout_seconds: float | None = None,
) -> str:
    """
    Resolve a poster image URL for `title`, falling back to PLACEHOLDER_POSTER_URL.

    Never raises: a missing key, a transport error, a non-200 status, a malformed body,
    an unknown title, or OMDb's "N/A" sentinel all degrade to the placeholder.
    """

    resolved_key = resolve_api_key(api_key)
    if resolved_key is None:
        logger.warning(f"OMDB_API_KEY is not set; using placeholder poster for {title!r}")
        return PLACEHOLDER_POSTER_URL

    try:
        payload = fetch_title(title, api_key=resolved_key, session=session, timeout_seconds=timeout_seconds)
    except OmdbClientError as exc:
        logger.warning(f"Poster fetch failed for {title!r}: {exc}")
        return PLACEHOLDER_POSTER_URL

    poster = extract_poster_url(payload)
    if poster is None:
        logger.info(f"No poster available for {title!r}; using placeholder")
        return PLACEHOLDER_POSTER_URL
    return poster
