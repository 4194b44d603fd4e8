from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException
from starlette.middleware.sessions import SessionMiddleware

from .dependencies import (
    close_places_client,
    get_history_store,
    get_places_client,
    get_session_id,
)
from .history.models import HistoryRecord, RatingRequest, RatingResponse
from .history.store import HistoryRecordNotFound, HistoryStore
from .places.geo import estimate_travel_time, navigation_url
from .places.google_client import GoogleMapsClient
from .places.models import GeocodeRequest, GeocodeResult, PlaceDetails
from .places.provider import ProviderError
from .search import find_restaurants, select_random
from .search.models import (
    Notification,
    NotificationKind,
    SearchRequest,
    SearchResult,
    SelectRequest,
    SelectResponse,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_places_client()


app = FastAPI(title="Where Should We Eat API", version="1.0.0", lifespan=lifespan)
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "where-should-we-eat-change-in-production"),
)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/geocode", response_model=GeocodeResult)
async def geocode(
    body: GeocodeRequest,
    places: GoogleMapsClient = Depends(get_places_client),
) -> GeocodeResult:
    try:
        return await places.geocode(body.address)
    except ProviderError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@app.get("/places/{place_id}", response_model=PlaceDetails)
async def place_details(
    place_id: str,
    places: GoogleMapsClient = Depends(get_places_client),
) -> PlaceDetails:
    try:
        return await places.get_place_details(place_id)
    except ProviderError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


# ── Search & selection ───────────────────────────────────────────────────


@app.post("/restaurants/search", response_model=SearchResult)
async def search_restaurants(
    body: SearchRequest,
    session_id: str = Depends(get_session_id),
    places: GoogleMapsClient = Depends(get_places_client),
    history: HistoryStore = Depends(get_history_store),
) -> SearchResult:
    exclusions = history.get_recently_visited_ids(session_id)
    logger.info("Excluding %d recently visited restaurants from search", len(exclusions))
    return await find_restaurants(body.origin, body.filters, exclusions, places)


@app.post("/restaurants/select", response_model=SelectResponse)
async def select_restaurant(
    body: SelectRequest,
    session_id: str = Depends(get_session_id),
    places: GoogleMapsClient = Depends(get_places_client),
    history: HistoryStore = Depends(get_history_store),
) -> SelectResponse:
    chosen = select_random(body.candidates)
    if chosen is None:
        return SelectResponse()

    # Candidates that failed the duration lookup during search carry none
    travel = chosen.travel_duration
    if travel is None:
        try:
            travel = await places.get_travel_duration(body.origin, chosen.location)
        except ProviderError:
            logger.warning("Travel duration unavailable, using straight-line estimate", exc_info=True)
            travel = estimate_travel_time(body.origin, chosen.location)["driving"]

    history_id = history.record_visit(session_id, chosen)
    return SelectResponse(
        restaurant=chosen,
        history_id=history_id,
        travel=travel,
        navigation_url=navigation_url(chosen.location),
    )


# ── History endpoints ────────────────────────────────────────────────────


@app.get("/history", response_model=list[HistoryRecord])
def list_history(
    session_id: str = Depends(get_session_id),
    history: HistoryStore = Depends(get_history_store),
) -> list[HistoryRecord]:
    return history.get_history(session_id)


def _owned_record(history: HistoryStore, record_id: str, session_id: str) -> HistoryRecord:
    try:
        record = history.get_record(record_id)
    except HistoryRecordNotFound:
        raise HTTPException(status_code=404, detail="History record not found")
    if record.session_id != session_id:
        raise HTTPException(status_code=404, detail="History record not found")
    return record


@app.post("/history/{record_id}/reveal", response_model=HistoryRecord)
def reveal(
    record_id: str,
    session_id: str = Depends(get_session_id),
    history: HistoryStore = Depends(get_history_store),
) -> HistoryRecord:
    _owned_record(history, record_id, session_id)
    return history.mark_revealed(record_id)


@app.post("/history/{record_id}/rating", response_model=RatingResponse)
def rate(
    record_id: str,
    body: RatingRequest,
    session_id: str = Depends(get_session_id),
    history: HistoryStore = Depends(get_history_store),
) -> RatingResponse:
    _owned_record(history, record_id, session_id)
    record = history.record_rating(record_id, body.rating)
    return RatingResponse(
        record=record,
        notification=Notification(
            kind=NotificationKind.success,
            message=f"Thanks for rating! Your {body.rating}-star review has been saved.",
        ),
    )
