"""Liveness probe for the listings API."""

from http.server import BaseHTTPRequestHandler
import json
import os

from propland.services.supabase_client import PLOTS_TABLE, RENTALS_TABLE

SERVICE_NAME = "propland-backend"


def health_payload() -> dict:
    """Status plus whether the listing store can be reached with the current env."""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "store_configured": bool(os.environ.get("SUPABASE_URL") and os.environ.get("SUPABASE_ANON_KEY")),
        "tables": {"plots": PLOTS_TABLE, "rentals": RENTALS_TABLE},
    }


class handler(BaseHTTPRequestHandler):

    def do_GET(self):
        body = json.dumps(health_payload()).encode('utf-8')
        self.send_response(200)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Cache-Control', 'no-store')
        self.end_headers()
        self.wfile.write(body)
