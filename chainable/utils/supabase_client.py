"""Supabase service-role client used by the Supabase date source."""

from functools import lru_cache

import httpx
from supabase.lib.client_options import SyncClientOptions

from chainable.config import settings
from chainable.utils.errors import ConfigurationError
from supabase import Client, create_client


def _build_sync_options() -> SyncClientOptions:
    max_connections = max(10, settings.supabase_http_max_connections)
    max_keepalive_connections = max(
        5,
        min(max_connections, settings.supabase_http_max_keepalive_connections),
    )
    timeout_seconds = max(1, settings.supabase_postgrest_timeout_seconds)

    httpx_client = httpx.Client(
        timeout=httpx.Timeout(timeout_seconds),
        limits=httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive_connections,
        ),
    )

    # chain lookups only read PostgREST tables; no auth session is kept
    return SyncClientOptions(
        auto_refresh_token=False,
        persist_session=False,
        postgrest_client_timeout=timeout_seconds,
        httpx_client=httpx_client,
    )


@lru_cache(maxsize=1)
def get_service_client() -> Client:
    """Return the service-role Supabase client (bypasses RLS).

    Chains are computed for arbitrary owners, not the signed-in user, so
    row-level security cannot scope the reads.
    """
    if not settings.has_supabase:
        raise ConfigurationError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be configured")
    return create_client(
        settings.supabase_url,
        settings.supabase_service_key,
        options=_build_sync_options(),
    )
