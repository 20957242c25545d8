from sqlalchemy import DDL, Column, DateTime, Integer, String, Text, event, func

from database import Base

SHARE_COUNTER = "share"
DOCUMENT_RENEWAL_COUNTER = "document_renewal"
SUBSCRIPTION_RENEWAL_COUNTER = "subscription_renewal"


class HistoryCounter(Base):
    """Last number handed out per history kind; bumped with a single UPDATE ... RETURNING."""

    __tablename__ = "history_counters"

    name = Column(String(32), primary_key=True)
    value = Column(Integer, nullable=False, default=0)


event.listen(
    HistoryCounter.__table__,
    "after_create",
    DDL(
        "INSERT INTO history_counters (name, value) VALUES "
        f"('{SHARE_COUNTER}', 0), ('{DOCUMENT_RENEWAL_COUNTER}', 0), ('{SUBSCRIPTION_RENEWAL_COUNTER}', 0)"
    ),
)


class ShareRecord(Base):
    __tablename__ = "share_history"

    id = Column(String(64), primary_key=True, index=True)
    # Allocated from history_counters; drives the SH-/RN- numbering and newest-first listing
    seq = Column(Integer, nullable=False, unique=True)
    share_no = Column(String(32), nullable=False, index=True)
    shared_at = Column(String(32), nullable=False)
    doc_serial = Column(String(32), nullable=False)
    doc_name = Column(String(512), nullable=False)
    doc_file = Column(String(512), nullable=True)
    shared_via = Column(String(16), nullable=False)
    recipient_name = Column(String(256), nullable=False)
    contact_info = Column(String(512), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class DocumentRenewalRecord(Base):
    __tablename__ = "document_renewal_history"

    id = Column(String(64), primary_key=True, index=True)
    seq = Column(Integer, nullable=False, unique=True)
    document_id = Column(String(64), nullable=False, index=True)
    sn = Column(String(32), nullable=False)
    document_name = Column(String(512), nullable=False)
    document_type = Column(String(256), nullable=True)
    category = Column(String(128), nullable=True)
    company_name = Column(String(256), nullable=True)
    entry_date = Column(String(32), nullable=True)
    old_renewal_date = Column(String(32), nullable=True)
    old_file = Column(Text, nullable=True)
    renewal_status = Column(String(8), nullable=False)
    next_renewal_date = Column(String(32), nullable=True)
    new_file = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class SubscriptionRenewalRecord(Base):
    __tablename__ = "subscription_renewal_history"

    id = Column(String(64), primary_key=True, index=True)
    seq = Column(Integer, nullable=False, unique=True)
    renewal_no = Column(String(32), nullable=False, index=True)
    subscription_id = Column(String(64), nullable=False, index=True)
    sn = Column(String(32), nullable=False)
    company_name = Column(String(256), nullable=True)
    subscriber_name = Column(String(256), nullable=True)
    subscription_name = Column(String(256), nullable=True)
    frequency = Column(String(64), nullable=True)
    price = Column(String(64), nullable=True)
    end_date = Column(String(32), nullable=True)
    new_end_date = Column(String(32), nullable=True)
    renewal_status = Column(String(16), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
