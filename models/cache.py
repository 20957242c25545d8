from sqlalchemy import JSON, Column, DateTime, Integer, String, func

from database import Base


class CachedCollection(Base):
    """Last-fetched copy of one backend collection (documents, subscriptions, loans, master)."""

    __tablename__ = "cached_collections"

    key = Column(String(64), primary_key=True)
    # Display-shaped items exactly as last served
    items = Column(JSON, nullable=False, default=list)
    item_count = Column(Integer, nullable=False, default=0)
    fetched_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
