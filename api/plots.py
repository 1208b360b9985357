"""Plot browsing endpoint: GET /api/plots with filter query parameters, or ?id= for one plot."""

from api._listings import ListingHandler
from propland.services.directory import Collection


class handler(ListingHandler):
    """Vercel serverless function handler for plots."""
    collection = Collection.PLOTS
