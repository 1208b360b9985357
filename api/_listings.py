"""Shared request handling for the listing browse endpoints."""

from http.server import BaseHTTPRequestHandler
import asyncio
import json
from typing import Optional
from urllib.parse import parse_qs, urlparse

from propland.models.criteria import PlotCriteria, RentalCriteria
from propland.services.directory import Collection, PropertyDirectory
from propland.services.filter_engine import (
    featured,
    filter_plots,
    filter_rentals,
    similar_plots,
    similar_rentals,
)
from propland.services.images import to_display_dict
from propland.services.listing_store import ListingStore, SupabaseListingStore
from propland.utils.errors import StoreReadError
from propland.utils.logging import correlation_context, get_structured_logger, timed
from propland.utils.logging_config import LoggingConfig

LoggingConfig.setup_logging()
logger = get_structured_logger(__name__)

_NOUNS = {
    Collection.PLOTS: ("plot", "plots"),
    Collection.RENTALS: ("rental", "rentals"),
}

_TRUTHY = {"1", "true", "yes"}


def _first(params: dict, key: str) -> Optional[str]:
    values = params.get(key)
    return values[0] if values else None


@timed("browse_listings", logger=logger)
async def browse(
    collection: Collection,
    query: str,
    store: Optional[ListingStore] = None,
) -> tuple[int, dict]:
    """
    Answer a browse request for one collection.

    Returns (status, payload). With an `id` parameter the payload is a single
    listing plus similar listings. With `featured=1` it is the directory's
    leading listings. Otherwise it is the filtered, sorted list.
    """
    directory = PropertyDirectory(store or SupabaseListingStore())
    params = parse_qs(query, keep_blank_values=True)
    singular, plural = _NOUNS[collection]

    try:
        await directory.load(collection)
    except StoreReadError:
        return 502, {"error": "listing store unavailable"}

    listing_id = _first(params, "id")
    if listing_id:
        if collection == Collection.PLOTS:
            listing = directory.get_plot(listing_id)
            similar = similar_plots(directory.plots, listing) if listing else []
        else:
            listing = directory.get_rental(listing_id)
            similar = similar_rentals(directory.rentals, listing) if listing else []
        if listing is None:
            return 404, {"error": f"{singular} not found"}
        return 200, {
            singular: to_display_dict(listing),
            "similar": [to_display_dict(s) for s in similar],
        }

    if _first(params, "featured") in _TRUTHY:
        listings = directory.plots if collection == Collection.PLOTS else directory.rentals
        results = featured(listings)
        return 200, {plural: [to_display_dict(r) for r in results], "count": len(results)}

    sort_key = _first(params, "sort")
    if collection == Collection.PLOTS:
        results = filter_plots(directory.plots, PlotCriteria.from_query(params), sort_key)
    else:
        results = filter_rentals(directory.rentals, RentalCriteria.from_query(params), sort_key)

    logger.info(
        "Listings browsed",
        collection=collection.value,
        total=len(directory.plots if collection == Collection.PLOTS else directory.rentals),
        matched=len(results),
        sort=sort_key
    )
    return 200, {plural: [to_display_dict(r) for r in results], "count": len(results)}


def _get_loop() -> asyncio.AbstractEventLoop:
    # Reuse one loop per warm instance; the Supabase client singleton is bound to it.
    try:
        loop = asyncio.get_event_loop()
        if loop.is_closed():
            raise RuntimeError("event loop is closed")
    except RuntimeError:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
    return loop


class ListingHandler(BaseHTTPRequestHandler):
    """Base handler; subclasses set `collection`."""

    collection: Collection = Collection.PLOTS

    def _send_json(self, status: int, payload: dict) -> None:
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
        self.wfile.write(json.dumps(payload).encode('utf-8'))

    def do_GET(self):
        with correlation_context() as correlation_id:
            try:
                query = urlparse(self.path).query
                status, payload = _get_loop().run_until_complete(browse(self.collection, query))
                self._send_json(status, payload)
            except Exception as e:
                logger.error(
                    "Error handling listing request",
                    correlation_id=correlation_id,
                    collection=self.collection.value,
                    error=str(e),
                    exc_info=True
                )
                self._send_json(500, {"error": "internal server error"})
