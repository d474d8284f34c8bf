"""
SQLAlchemy models for Widgetboard.

Every entity type shares one table: the record itself is kept as JSON and
the owning collection and user are indexed columns.
"""

from sqlalchemy import Column, String, DateTime, Integer, JSON

from Data.database import Base, utcnow


# --------------------------------------------------------------------------- #
# Records
# --------------------------------------------------------------------------- #

class Record(Base):
    __tablename__ = "records"

    # Insertion sequence; keeps list order stable for equal sort keys
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), unique=True, nullable=False, index=True)
    collection = Column(String(64), nullable=False, index=True)
    user_id = Column(String, nullable=False, index=True)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=utcnow)
