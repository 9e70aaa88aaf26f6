"""
Event persistence and retrieval.

Owns the SQL shape of the `events` table:
- Schema reset (drop and recreate, losing all rows)
- Insert with store-assigned identifiers
- Filtered listing, newest timestamp first

The `data` document is serialized to JSON text on the way in and parsed
again on the way out. A stored document that no longer parses comes back
as null instead of failing the whole listing.
"""

import json
import logging
from contextlib import contextmanager
from typing import Any, List, Optional

from sqlalchemy import Text, and_, cast
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from event_tracker.domain.events import DevelopmentEvent, EventCreate
from event_tracker.errors import DatabaseError, InternalError, InvalidJSONError
from event_tracker.models.events import Event

logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"non-finite number {name}")


class EventStore:
    """Service for storing and querying development events."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _database_errors(self, operation: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError(f"{operation} failed: {e}") from e

    def reset_schema(self) -> None:
        """
        Drop the events table if it exists and create it again.

        Safe to call repeatedly. Every stored event is lost.
        """
        table = Event.__table__
        with self._database_errors("reset"):
            conn = self.db.connection()
            table.drop(conn, checkfirst=True)
            table.create(conn)
            self.db.commit()

        logger.info("[INIT] Events table dropped and recreated")

    def ingest(self, event: EventCreate) -> int:
        """
        Persist one event.

        Args:
            event: Validated event from the request body

        Returns:
            The identifier assigned by the store

        Raises:
            DatabaseError: If the insert fails
            InvalidJSONError: If the data holds NaN or Infinity
            InternalError: If the insert succeeded but no identifier came back
        """
        try:
            data_text = json.dumps(event.data, allow_nan=False)
        except ValueError as e:
            raise InvalidJSONError(f"data is not valid JSON: {e}") from e

        row = Event(
            timestamp=event.timestamp,
            source=event.source,
            event_type=event.event_type,
            data=data_text,
        )

        with self._database_errors("ingest"):
            self.db.add(row)
            self.db.flush()
            event_id = row.id
            self.db.commit()

        if event_id is None:
            raise InternalError("Could not retrieve last insert ID")

        logger.info(
            f"[INGEST] Stored event {event_id} ({event.source}/{event.event_type})"
        )
        return event_id

    def list_events(
        self,
        source: Optional[str] = None,
        event_type: Optional[str] = None,
        q: Optional[str] = None,
    ) -> List[DevelopmentEvent]:
        """
        List events, newest timestamp first.

        Empty filters are treated the same as missing ones. Events sharing
        a timestamp come back in whatever order the database returns them.

        Args:
            source: Only events from this source
            event_type: Only events of this type
            q: Only events whose serialized data contains this text

        Returns:
            List of DevelopmentEvent
        """
        # (column, value) equality constraints, skipped when the value is empty
        equality = [(Event.source, source), (Event.event_type, event_type)]
        clauses = [column == value for column, value in equality if value]
        if q:
            clauses.append(cast(Event.data, Text).contains(q, autoescape=True))

        with self._database_errors("list"):
            query = self.db.query(Event)
            if clauses:
                query = query.filter(and_(*clauses))
            rows = query.order_by(Event.timestamp.desc()).all()

        logger.debug(
            f"[EVENTS] {len(rows)} event(s) for source={source!r} "
            f"event_type={event_type!r} q={q!r}"
        )
        return [self._to_event(row) for row in rows]

    def _to_event(self, row: Event) -> DevelopmentEvent:
        return DevelopmentEvent(
            id=row.id,
            timestamp=row.timestamp,
            source=row.source,
            event_type=row.event_type,
            data=self._parse_data(row.id, row.data),
        )

    @staticmethod
    def _parse_data(event_id: int, raw: Any) -> Any:
        # Some drivers already decode native JSON columns
        if raw is None or not isinstance(raw, str):
            return raw
        try:
            return json.loads(raw, parse_constant=_reject_constant)
        except ValueError:
            logger.warning(f"[EVENTS] Stored data for event {event_id} is not valid JSON")
            return None
