from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from supabase import Client, create_client

SUPABASE_URL_ENV = "SUPABASE_URL"
SUPABASE_SERVICE_KEY_ENV = "SUPABASE_SERVICE_ROLE_KEY"


class SupabaseConfigError(RuntimeError):
    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Missing Supabase settings: {', '.join(missing)} (set them in the environment or .env)")
        self.missing = missing


@dataclass(frozen=True)
class SupabaseSettings:
    url: str
    service_role_key: str


@lru_cache
def get_supabase_settings() -> SupabaseSettings:
    """
    Read the store connection settings once per process.

    Raises SupabaseConfigError naming every unset variable, not just the first.
    """

    values = {name: (os.getenv(name) or "").strip() for name in (SUPABASE_URL_ENV, SUPABASE_SERVICE_KEY_ENV)}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise SupabaseConfigError(missing)
    return SupabaseSettings(url=values[SUPABASE_URL_ENV], service_role_key=values[SUPABASE_SERVICE_KEY_ENV])


def create_supabase_admin_client(*, settings: SupabaseSettings | None = None) -> Client:
    """Service-role client for `public.movies`; the API both reads and writes, so RLS is bypassed."""
    settings = settings or get_supabase_settings()
    return create_client(settings.url, settings.service_role_key)
