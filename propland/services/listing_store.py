"""The narrow listing store interface the directory and auth gate depend on.

`SupabaseListingStore` is the production implementation. Tests substitute an
in-memory store with the same methods.
"""

from typing import Any, Callable, Optional, Protocol

from propland.services.supabase_client import (
    SupabaseClient,
    delete_row,
    fetch_rows,
    insert_row,
)
from propland.utils.errors import AuthError, SupabaseError
from propland.utils.logging import get_structured_logger, mask_email, mask_sensitive_data

logger = get_structured_logger(__name__)

ChangeCallback = Callable[[dict], None]
AuthCallback = Callable[[str, Optional[Any]], None]


class ListingStore(Protocol):
    """Persistence, change notification and authentication for listings."""

    async def fetch_all(self, table: str) -> list[dict]: ...

    async def insert(self, table: str, row: dict) -> dict: ...

    async def delete(self, table: str, row_id: str) -> None: ...

    async def subscribe(self, table: str, callback: ChangeCallback) -> Any: ...

    async def unsubscribe(self, handle: Any) -> None: ...

    async def sign_in(self, email: str, password: str) -> Any: ...

    async def sign_up(self, email: str, password: str) -> Any: ...

    async def sign_out(self) -> None: ...

    async def get_session(self) -> Optional[Any]: ...

    async def on_auth_change(self, callback: AuthCallback) -> Any: ...

    async def remove_auth_listener(self, handle: Any) -> None: ...


def _auth_message(exc: Exception) -> str:
    # gotrue errors carry a user-facing `message`
    return getattr(exc, "message", None) or str(exc)


class SupabaseListingStore:
    """ListingStore backed by Supabase tables, realtime channels and auth."""

    async def fetch_all(self, table: str) -> list[dict]:
        return await fetch_rows(table)

    async def insert(self, table: str, row: dict) -> dict:
        return await insert_row(table, row)

    async def delete(self, table: str, row_id: str) -> None:
        await delete_row(table, row_id)

    async def subscribe(self, table: str, callback: ChangeCallback) -> Any:
        """Open a realtime channel reporting every insert/update/delete on `table`."""
        async with SupabaseClient() as client:
            try:
                channel = client.channel(f"{table}-changes")
                channel.on_postgres_changes(
                    "*",
                    schema="public",
                    table=table,
                    callback=callback,
                )
                await channel.subscribe()
            except Exception as e:
                raise SupabaseError(f"Failed to subscribe to {table}: {e}") from e
            logger.info("Subscribed to table changes", table=table)
            return channel

    async def unsubscribe(self, handle: Any) -> None:
        async with SupabaseClient() as client:
            await client.remove_channel(handle)

    async def sign_in(self, email: str, password: str) -> Any:
        async with SupabaseClient() as client:
            try:
                response = await client.auth.sign_in_with_password(
                    {"email": email, "password": password}
                )
            except Exception as e:
                message = _auth_message(e)
                logger.warning(
                    "Sign-in rejected",
                    email=mask_email(email),
                    error=mask_sensitive_data(message)
                )
                raise AuthError(message) from e
            return response.session

    async def sign_up(self, email: str, password: str) -> Any:
        async with SupabaseClient() as client:
            try:
                response = await client.auth.sign_up({"email": email, "password": password})
            except Exception as e:
                message = _auth_message(e)
                logger.warning(
                    "Sign-up rejected",
                    email=mask_email(email),
                    error=mask_sensitive_data(message)
                )
                raise AuthError(message) from e
            return response.session

    async def sign_out(self) -> None:
        async with SupabaseClient() as client:
            try:
                await client.auth.sign_out()
            except Exception as e:
                raise AuthError(_auth_message(e)) from e

    async def get_session(self) -> Optional[Any]:
        async with SupabaseClient() as client:
            return await client.auth.get_session()

    async def on_auth_change(self, callback: AuthCallback) -> Any:
        async with SupabaseClient() as client:
            return client.auth.on_auth_state_change(callback)

    async def remove_auth_listener(self, handle: Any) -> None:
        handle.unsubscribe()
