"""
Development event wire models.

An event is a timestamp, a source, an event type and an arbitrary JSON
document. The first three are plain strings the server never interprets
(the timestamp is only used for ordering); `data` is the one untyped field
and is stored and returned verbatim.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, StrictInt


class EventCreate(BaseModel):
    """Body of POST /ingest. A client `id` must be an integer and is ignored."""

    id: Optional[StrictInt] = Field(None, description="Ignored; store-assigned")
    timestamp: str = Field(..., description="Caller-supplied timestamp (opaque)")
    source: str = Field(..., description="Originating tool or system")
    event_type: str = Field(..., description="Kind of event")
    data: Any = Field(..., description="Arbitrary JSON document")


class DevelopmentEvent(BaseModel):
    """A stored event as returned by GET /events."""

    id: int
    timestamp: str
    source: str
    event_type: str
    data: Any = None


class IngestResponse(BaseModel):
    status: Literal["ingested"] = "ingested"
    id: int


class StatusResponse(BaseModel):
    status: str


class ErrorResponse(BaseModel):
    error: str
