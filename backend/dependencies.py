from __future__ import annotations

import uuid

from fastapi import Request

from .history.store import HistoryStore
from .places.google_client import GoogleMapsClient

_places_client: GoogleMapsClient | None = None
_history_store: HistoryStore | None = None


def get_places_client() -> GoogleMapsClient:
    """Return the process-wide Google Maps client, creating it on first call."""
    global _places_client
    if _places_client is None:
        _places_client = GoogleMapsClient()
    return _places_client


def get_history_store() -> HistoryStore:
    """Return the process-wide history store, creating it on first call."""
    global _history_store
    if _history_store is None:
        _history_store = HistoryStore()
    return _history_store


async def close_places_client() -> None:
    global _places_client
    if _places_client is not None:
        await _places_client.aclose()
        _places_client = None


def get_session_id(request: Request) -> str:
    """Return the anonymous session id, assigning one on first use."""
    session_id = request.session.get("session_id")
    if not session_id:
        session_id = str(uuid.uuid4())
        request.session["session_id"] = session_id
    return session_id
