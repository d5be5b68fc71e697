from __future__ import annotations

from functools import lru_cache

from supabase import Client, create_client
from supabase.lib.client_options import ClientOptions

from notes_relevance.config import settings
from notes_relevance.utils.logging import get_logger

logger = get_logger(__name__)


def _connect(key: str) -> Client:
    # Server-side clients never persist or refresh user sessions
    return create_client(
        settings.supabase_url,
        key,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )


@lru_cache(maxsize=1)
def get_supabase_admin_client() -> Client:
    """Return a cached service-role client.

    Used by background embedding jobs, which write `notes_embeddings` rows
    outside of any request's RLS context.
    """
    if not settings.supabase_service_role_key:
        raise RuntimeError("supabase_service_role_key is required for admin client")
    logger.debug("Initializing Supabase admin client")
    return _connect(settings.supabase_service_role_key)


def create_request_supabase_client(bearer_token: str | None = None) -> Client:
    """Create a request-scoped anon client.

    With a JWT, PostgREST runs every table read and RPC (including
    `match_embeddings`) under the caller's RLS policies.
    """
    if not settings.supabase_anon_key:
        raise RuntimeError("supabase_anon_key is required for request client")
    logger.debug("Creating request-scoped Supabase client", extra={"authenticated": bool(bearer_token)})
    client = _connect(settings.supabase_anon_key)
    if bearer_token:
        client.postgrest.auth(bearer_token)
    return client
