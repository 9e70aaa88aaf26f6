"""
Database engine, session factory and the FastAPI session dependency.

The engine (and its connection pool) is created once at import time and
shared by every request; each request borrows its own Session.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from event_tracker.config import Settings, settings


def build_engine(config: Settings) -> Engine:
    """
    Create an engine with a bounded connection pool.

    `pool_size` keeps the configured minimum of connections around and
    `max_overflow` lets the pool grow up to the configured maximum. Callers
    past the ceiling wait for a connection to be returned.
    """
    if config.database_url.startswith("sqlite"):
        return create_engine(
            config.database_url, connect_args={"check_same_thread": False}
        )

    return create_engine(
        config.database_url,
        pool_size=config.db_pool_min_size,
        max_overflow=config.db_pool_overflow,
        pool_pre_ping=True,
    )


engine = build_engine(settings)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a Session for the duration of one request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
