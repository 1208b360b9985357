"""Supabase client wrapper with async context manager support."""

import os
from typing import Optional
from supabase import AsyncClient, acreate_client
from supabase.lib.client_options import AsyncClientOptions
from propland.utils.errors import ConfigurationError, StoreReadError, StoreWriteError
from propland.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)

PLOTS_TABLE = os.environ.get("PLOTS_TABLE", "plots")
RENTALS_TABLE = os.environ.get("RENTALS_TABLE", "rental_houses")

# Global client instance (singleton pattern)
_client: Optional[AsyncClient] = None


async def get_supabase_client() -> AsyncClient:
    """Get or create the async Supabase client singleton."""
    global _client

    if _client is None:
        url = os.environ.get("SUPABASE_URL")
        key = os.environ.get("SUPABASE_ANON_KEY")

        if not url or not key:
            raise ConfigurationError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")

        # Sessions live only as long as the process; realtime needs the async client
        options = AsyncClientOptions(
            auto_refresh_token=True,
            persist_session=False,
        )

        _client = await acreate_client(url, key, options=options)
        logger.info("Supabase client initialized", url=url)

    return _client


async def close_supabase_client() -> None:
    """Drop realtime channels and the client reference."""
    global _client
    if _client:
        await _client.remove_all_channels()
        _client = None
        logger.info("Supabase client closed")


class SupabaseClient:
    """Async context manager for the Supabase client."""

    def __init__(self):
        self.client: Optional[AsyncClient] = None

    async def __aenter__(self) -> AsyncClient:
        self.client = await get_supabase_client()
        return self.client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            logger.error(
                "Supabase operation error",
                error=str(exc_val),
                type=exc_type.__name__
            )
        return False


# Listing table operations
async def fetch_rows(table: str) -> list[dict]:
    """Fetch every row of a listing table, newest first."""
    async with SupabaseClient() as client:
        try:
            with log_timing("fetch_rows", logger=logger, table=table):
                result = await client.table(table).select("*").order("created_at", desc=True).execute()
            return result.data if result.data else []
        except Exception as e:
            raise StoreReadError(f"Failed to fetch {table}: {e}") from e


async def insert_row(table: str, row: dict) -> dict:
    """Insert a listing row; the store assigns id and created_at."""
    async with SupabaseClient() as client:
        try:
            result = await client.table(table).insert(row).execute()
        except Exception as e:
            raise StoreWriteError(f"Failed to insert into {table}: {e}") from e
        if result.data and len(result.data) > 0:
            return result.data[0]
        raise StoreWriteError(f"Failed to insert into {table}: no data returned")


async def delete_row(table: str, row_id: str) -> None:
    """Delete a listing row by id. Deleting a missing id is not an error."""
    async with SupabaseClient() as client:
        try:
            await client.table(table).delete().eq("id", row_id).execute()
        except Exception as e:
            raise StoreWriteError(f"Failed to delete {row_id} from {table}: {e}") from e
