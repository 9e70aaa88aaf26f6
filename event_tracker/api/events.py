"""
Development event endpoints.

GET /init resets the events table, POST /ingest stores one event and
GET /events lists stored events with optional filters. Successful
responses carry permissive CORS headers so the browser timeline can call
the API from another origin.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session
from starlette.requests import ClientDisconnect

from event_tracker.db.database import get_db
from event_tracker.domain.events import EventCreate, IngestResponse, StatusResponse
from event_tracker.errors import InvalidJSONError, RequestBodyError
from event_tracker.services.event_store import EventStore

router = APIRouter()

ROOT_MESSAGE = "Development Event Tracker API"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "api,Keep-Alive,User-Agent,Content-Type",
}


def cors_response(content) -> JSONResponse:
    """200 JSON response with the CORS headers attached."""
    return JSONResponse(
        status_code=status.HTTP_200_OK, content=content, headers=CORS_HEADERS
    )


async def read_event(request: Request) -> EventCreate:
    """
    Read and parse the raw request body into an EventCreate.

    Raises:
        RequestBodyError: If the body could not be read
        InvalidJSONError: If the body is not an event object
    """
    try:
        body = await request.body()
    except ClientDisconnect as e:
        raise RequestBodyError(f"Client disconnected while sending body: {e}") from e

    try:
        return EventCreate.model_validate_json(body)
    except ValidationError as e:
        raise InvalidJSONError(str(e)) from e


@router.get("/", response_class=PlainTextResponse)
def root():
    """Root endpoint."""
    return ROOT_MESSAGE


@router.options("/ingest")
@router.options("/events")
def preflight():
    """Answer CORS pre-flight requests without touching the database."""
    return cors_response(StatusResponse(status="ok").model_dump())


@router.get("/init")
def init_schema(db: Session = Depends(get_db)):
    """
    Drop and recreate the events table.

    Destructive: every stored event is lost. Safe to call repeatedly.
    """
    EventStore(db).reset_schema()
    return cors_response(StatusResponse(status="initialized").model_dump())


@router.post("/ingest")
def ingest_event(
    event: EventCreate = Depends(read_event),
    db: Session = Depends(get_db),
):
    """
    Store a single event.

    The body must be an object with string `timestamp`, `source` and
    `event_type` fields and a `data` field holding any JSON value.
    Returns the identifier the store assigned.
    """
    event_id = EventStore(db).ingest(event)
    return cors_response(IngestResponse(id=event_id).model_dump())


@router.get("/events")
def list_events(
    source: Optional[str] = Query(None, description="Filter by source"),
    event_type: Optional[str] = Query(None, description="Filter by event type"),
    q: Optional[str] = Query(None, description="Search the event data"),
    db: Session = Depends(get_db),
):
    """
    List stored events, newest timestamp first.

    Empty filter values are ignored.
    """
    events = EventStore(db).list_events(source=source, event_type=event_type, q=q)
    return cors_response([event.model_dump() for event in events])
