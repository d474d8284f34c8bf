"""
Database engine, session, and utilities for Widgetboard.
Uses SQLAlchemy; SQLite unless DATABASE_URL points elsewhere.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
import uuid
from datetime import datetime, timezone

Base = declarative_base()


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def utcnow_iso() -> str:
    return utcnow().isoformat()


def today() -> str:
    """Today's date (UTC) as YYYY-MM-DD."""
    return utcnow().date().isoformat()


def make_engine(database_url: str) -> Engine:
    """Build an engine; in-memory SQLite shares one connection across threads."""
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=False)
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        database_url, echo=False, connect_args={"check_same_thread": False}
    )


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_db(engine: Engine):
    """Create all tables if they don't exist."""
    # Import models so they are registered on Base.metadata
    from Data import models  # noqa: F401

    Base.metadata.create_all(engine)
