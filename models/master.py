from sqlalchemy import Column, DateTime, String, UniqueConstraint, func

from database import Base


class MasterLookup(Base):
    """Locally learned (company, document type, category) triple used for autocomplete."""

    __tablename__ = "master_lookups"
    __table_args__ = (UniqueConstraint("lookup_key", name="uq_master_lookups_lookup_key"),)

    id = Column(String(64), primary_key=True, index=True)
    company_name = Column(String(256), nullable=False)
    document_type = Column(String(256), nullable=False)
    category = Column(String(128), nullable=False)
    # Lower-cased "company|type|category", the de-duplication key
    lookup_key = Column(String(700), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
