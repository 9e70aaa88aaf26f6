from sqlalchemy import Column, Integer, String

from event_tracker.db.database import Base
from event_tracker.db.types import JSONDocument


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)  # Store-assigned
    timestamp = Column(String(255))
    source = Column(String(255))
    event_type = Column(String(255))
    data = Column(JSONDocument())  # Serialized JSON text
