"""Property directory - in-process cache of plots and rentals kept in sync with the listing store."""

import asyncio
from contextlib import asynccontextmanager
from enum import Enum
from functools import partial
from typing import Any, AsyncIterator, Callable, Optional, Union

from pydantic import ValidationError

from propland.models.plot import Plot, PlotCreate
from propland.models.rental_house import RentalHouse, RentalHouseCreate
from propland.services.filter_engine import find_by_id
from propland.services.listing_store import ListingStore
from propland.services.supabase_client import PLOTS_TABLE, RENTALS_TABLE
from propland.utils.errors import StoreReadError, StoreWriteError
from propland.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)

Listener = Callable[["Collection"], None]


class Collection(str, Enum):
    """The two listing collections the directory owns."""
    PLOTS = "plots"
    RENTALS = "rentals"


class PropertyDirectory:
    """
    Single-writer cache of both listing collections.

    Each collection is held as an immutable tuple and replaced wholesale on
    every load, so readers always see one complete snapshot. Mutations go to
    the store first and are never applied locally; the store's change
    notification (or an explicit load) brings them back.
    """

    def __init__(
        self,
        store: ListingStore,
        plots_table: str = PLOTS_TABLE,
        rentals_table: str = RENTALS_TABLE,
    ):
        self._store = store
        self._tables = {
            Collection.PLOTS: plots_table,
            Collection.RENTALS: rentals_table,
        }
        self._models = {
            Collection.PLOTS: Plot,
            Collection.RENTALS: RentalHouse,
        }
        self._snapshots: dict[Collection, tuple] = {
            Collection.PLOTS: (),
            Collection.RENTALS: (),
        }
        self._listeners: list[Listener] = []
        self._pending: set[asyncio.Task] = set()
        self._handles: list[Any] = []
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def plots(self) -> tuple[Plot, ...]:
        return self._snapshots[Collection.PLOTS]

    @property
    def rentals(self) -> tuple[RentalHouse, ...]:
        return self._snapshots[Collection.RENTALS]

    def get_plot(self, plot_id: str) -> Optional[Plot]:
        return find_by_id(self.plots, plot_id)

    def get_rental(self, rental_id: str) -> Optional[RentalHouse]:
        return find_by_id(self.rentals, rental_id)

    def add_listener(self, callback: Listener) -> None:
        """Register a callback told which collection was just replaced."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    # Loading

    async def load(self, collection: Collection) -> tuple:
        """
        Fetch one collection and swap it in.

        Raises StoreReadError on failure; the previous snapshot stays in place.
        """
        table = self._tables[collection]
        try:
            with log_timing("load_collection", logger=logger, collection=collection.value):
                rows = await self._store.fetch_all(table)
        except StoreReadError:
            logger.error("Failed to load collection", collection=collection.value, exc_info=True)
            raise
        except Exception as e:
            logger.error("Failed to load collection", collection=collection.value, exc_info=True)
            raise StoreReadError(f"Failed to fetch {table}: {e}") from e

        records = []
        model = self._models[collection]
        for row in rows:
            try:
                records.append(model.model_validate(row))
            except ValidationError as e:
                logger.warning(
                    "Skipping malformed listing row",
                    collection=collection.value,
                    row_id=row.get("id") if isinstance(row, dict) else None,
                    error=str(e)
                )

        self._snapshots[collection] = tuple(records)
        logger.info("Collection refreshed", collection=collection.value, count=len(records))
        self._notify(collection)
        return self._snapshots[collection]

    async def load_plots(self) -> tuple[Plot, ...]:
        return await self.load(Collection.PLOTS)

    async def load_rentals(self) -> tuple[RentalHouse, ...]:
        return await self.load(Collection.RENTALS)

    async def load_all(self) -> None:
        """
        Fetch both collections.

        Each collection is swapped independently; if either fetch fails the
        other still lands and the first failure is raised afterwards.
        """
        results = await asyncio.gather(
            self.load(Collection.PLOTS),
            self.load(Collection.RENTALS),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result

    # Write-through mutations

    async def create(
        self,
        collection: Collection,
        record: Union[PlotCreate, RentalHouseCreate, dict],
    ) -> Union[Plot, RentalHouse]:
        """Insert a new listing in the store and return it as stored (with its new id)."""
        create_model = PlotCreate if collection == Collection.PLOTS else RentalHouseCreate
        if not isinstance(record, create_model):
            try:
                record = create_model.model_validate(record)
            except ValidationError as e:
                logger.error("Rejected invalid listing", collection=collection.value, error=str(e))
                raise StoreWriteError(f"Invalid {collection.value} record: {e}") from e

        table = self._tables[collection]
        try:
            row = await self._store.insert(table, record.to_row())
        except StoreWriteError:
            logger.error("Failed to create listing", collection=collection.value, exc_info=True)
            raise
        except Exception as e:
            logger.error("Failed to create listing", collection=collection.value, exc_info=True)
            raise StoreWriteError(f"Failed to insert into {table}: {e}") from e

        logger.info("Listing created", collection=collection.value, listing_id=row.get("id"))
        return self._models[collection].model_validate(row)

    async def create_plot(self, record: Union[PlotCreate, dict]) -> Plot:
        return await self.create(Collection.PLOTS, record)

    async def create_rental(self, record: Union[RentalHouseCreate, dict]) -> RentalHouse:
        return await self.create(Collection.RENTALS, record)

    async def delete(self, collection: Collection, listing_id: str) -> None:
        """Delete a listing from the store by id."""
        table = self._tables[collection]
        try:
            await self._store.delete(table, listing_id)
        except StoreWriteError:
            logger.error(
                "Failed to delete listing",
                collection=collection.value,
                listing_id=listing_id,
                exc_info=True
            )
            raise
        except Exception as e:
            logger.error(
                "Failed to delete listing",
                collection=collection.value,
                listing_id=listing_id,
                exc_info=True
            )
            raise StoreWriteError(f"Failed to delete {listing_id} from {table}: {e}") from e

        logger.info("Listing deleted", collection=collection.value, listing_id=listing_id)

    async def delete_plot(self, plot_id: str) -> None:
        await self.delete(Collection.PLOTS, plot_id)

    async def delete_rental(self, rental_id: str) -> None:
        await self.delete(Collection.RENTALS, rental_id)

    # Change notifications

    @asynccontextmanager
    async def subscribe_to_changes(self) -> AsyncIterator["PropertyDirectory"]:
        """
        Hold one change feed per collection for the duration of the block.

        Any event on a collection triggers a full refetch of that collection.
        Feeds acquired here are released however the block exits.
        """
        self._loop = asyncio.get_running_loop()
        acquired = []
        try:
            for collection in Collection:
                handle = await self._store.subscribe(
                    self._tables[collection],
                    partial(self._on_change, collection),
                )
                acquired.append(handle)
                self._handles.append(handle)
            yield self
        finally:
            for handle in reversed(acquired):
                await self._release(handle)

    async def _release(self, handle: Any) -> None:
        if handle not in self._handles:
            return
        self._handles.remove(handle)
        try:
            await self._store.unsubscribe(handle)
        except Exception:
            logger.error("Failed to release change feed", exc_info=True)

    def _on_change(self, collection: Collection, payload: Any = None) -> None:
        # Called by the store, possibly from another thread.
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is not None and running is self._loop:
            self._schedule_refetch(collection)
        elif self._loop is not None and not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._schedule_refetch, collection)

    def _schedule_refetch(self, collection: Collection) -> None:
        logger.debug("Change notification received", collection=collection.value)
        task = asyncio.get_running_loop().create_task(self._refetch(collection))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _refetch(self, collection: Collection) -> None:
        try:
            await self.load(collection)
        except StoreReadError:
            # Keep the previous snapshot; the next notification or explicit load retries.
            logger.warning("Refetch after change notification failed", collection=collection.value)

    def _notify(self, collection: Collection) -> None:
        for callback in list(self._listeners):
            try:
                callback(collection)
            except Exception:
                logger.error("Directory listener failed", collection=collection.value, exc_info=True)

    async def settle(self) -> None:
        """Wait until every refetch scheduled by a change notification has finished."""
        # Let callbacks queued with call_soon_threadsafe create their tasks first.
        await asyncio.sleep(0)
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def close(self) -> None:
        """Release any feeds still held and wait for in-flight refetches."""
        for handle in list(self._handles):
            await self._release(handle)
        await self.settle()
        self._listeners.clear()
