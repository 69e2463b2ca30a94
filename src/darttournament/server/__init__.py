"""HTTP server: session storage and the JSON API around the tournament core."""

from darttournament.server.app import create_app
from darttournament.server.session_store import SessionStore
from darttournament.server.settings import ServerSettings, load_settings

__all__ = ["create_app", "SessionStore", "ServerSettings", "load_settings"]
