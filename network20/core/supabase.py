"""Supabase client construction for the remote backend."""

import logging
from typing import Any

from supabase import Client, create_client
from supabase.lib.client_options import SyncClientOptions
from supabase_auth import SyncSupportedStorage

from network20.core.config import Settings
from network20.core.errors import BackendNotConfiguredError

logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"
JOBS_TABLE = "jobs"


def create_supabase_client(settings: Settings, storage: SyncSupportedStorage) -> Client:
    """Create the Supabase client shared by data and auth operations.

    The same client is used for table queries and auth so that row-level
    security sees the signed-in user's token. The session is persisted in
    the given storage so sign-in survives a process restart.

    Args:
        settings: Application settings with the Supabase URL and anon key.
        storage: Key-value storage for the auth session.

    Returns:
        Client: Supabase client instance.

    Raises:
        BackendNotConfiguredError: If the URL or key is missing.
    """
    if not settings.remote_configured:
        raise BackendNotConfiguredError("Supabase URL and anon key are required")

    options = SyncClientOptions(
        storage=storage,
        auto_refresh_token=True,
        persist_session=True,
    )
    logger.info("Connecting to Supabase at %s", settings.supabase_url)
    return create_client(
        settings.supabase_url,
        settings.supabase_anon_key,
        options=options,
    )


async def check_database_connection(client: Client) -> dict[str, Any]:
    """Check that the profiles and jobs tables are reachable.

    Args:
        client: Supabase client.

    Returns:
        dict: Overall 'healthy' flag plus one status entry per table.
    """
    tables: dict[str, dict[str, Any]] = {}
    for table in (PROFILES_TABLE, JOBS_TABLE):
        try:
            client.table(table).select("id").limit(1).execute()
            tables[table] = {"healthy": True}
        except Exception as e:
            logger.warning("Health check failed for table %s: %s", table, e)
            tables[table] = {"healthy": False, "error": str(e)}

    return {
        "healthy": all(status["healthy"] for status in tables.values()),
        "tables": tables,
    }
