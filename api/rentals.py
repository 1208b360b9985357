"""Rental browsing endpoint: GET /api/rentals with filter query parameters, or ?id= for one rental."""

from api._listings import ListingHandler
from propland.services.directory import Collection


class handler(ListingHandler):
    """Vercel serverless function handler for rental houses."""
    collection = Collection.RENTALS
