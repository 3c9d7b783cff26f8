"""In-memory entity server (aiohttp.web)."""

from pokesync.server.app import create_app, run_server
from pokesync.server.store import EntityStore

__all__ = ["EntityStore", "create_app", "run_server"]
