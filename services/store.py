"""
Local persisted store.

Holds the last-fetched copy of each backend collection so a screen has
something to show when the backend is unreachable, plus the client-generated
audit history (shares, renewals) and locally learned master lookups.

The cache is never merged with backend data: a successful fetch replaces the
whole collection, and cached items are only served when a fetch failed.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models import (
    CachedCollection,
    DocumentRenewalRecord,
    HistoryCounter,
    MasterLookup,
    ShareRecord,
    SubscriptionRenewalRecord,
)
from models.history import DOCUMENT_RENEWAL_COUNTER, SHARE_COUNTER, SUBSCRIPTION_RENEWAL_COUNTER

DOCUMENTS = "documents"
SUBSCRIPTIONS = "subscriptions"
LOANS = "loans"
MASTER = "master"


def master_key(company_name: str, document_type: str, category: str) -> str:
    return "|".join(s.strip().lower() for s in (company_name, document_type, category))


class DataStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    # --- cached collections ---

    async def get_collection(self, key: str) -> Optional[list[dict[str, Any]]]:
        """Cached items, or None when the collection was never fetched."""
        row = await self.session.get(CachedCollection, key)
        if row is None:
            return None
        return list(row.items or [])

    async def get_collections(self, keys: Iterable[str]) -> dict[str, list[dict[str, Any]]]:
        result = await self.session.execute(select(CachedCollection).where(CachedCollection.key.in_(list(keys))))
        return {row.key: list(row.items or []) for row in result.scalars().all()}

    async def replace_collection(self, key: str, items: list[dict[str, Any]]) -> None:
        """Whole-collection replace; no merge with what was cached before."""
        now = datetime.now(timezone.utc)
        row = await self.session.get(CachedCollection, key)
        if row is None:
            row = CachedCollection(key=key)
            self.session.add(row)
        row.items = list(items)
        row.item_count = len(items)
        row.fetched_at = now
        await self.session.flush()

    # --- append-only history ---

    async def _allocate(self, counter: str, count: int = 1) -> int:
        """
        Reserve `count` consecutive numbers and return the first. The bump is
        one UPDATE ... RETURNING, so concurrent sessions never share a number.
        """
        stmt = (
            update(HistoryCounter)
            .where(HistoryCounter.name == counter)
            .values(value=HistoryCounter.value + count)
            .returning(HistoryCounter.value)
            .execution_options(synchronize_session=False)
        )
        last = (await self.session.execute(stmt)).scalar_one()
        return last - count + 1

    async def add_share_records(self, records: list[dict[str, Any]]) -> list[ShareRecord]:
        """
        Each record: docSerial, docName, docFile, sharedVia, recipientName,
        contactInfo and optionally dateTime. Numbered SH-nnn in order.
        """
        if not records:
            return []
        seq = await self._allocate(SHARE_COUNTER, len(records))
        now = datetime.now().strftime("%Y-%m-%d %H:%M")
        rows: list[ShareRecord] = []
        for offset, rec in enumerate(records):
            row = ShareRecord(
                id=f"share-{uuid.uuid4().hex[:12]}",
                seq=seq + offset,
                share_no=f"SH-{seq + offset:03d}",
                shared_at=rec.get("dateTime") or now,
                doc_serial=rec.get("docSerial") or "SN-???",
                doc_name=rec.get("docName") or "",
                doc_file=rec.get("docFile") or "document.pdf",
                shared_via=rec["sharedVia"],
                recipient_name=rec.get("recipientName") or "Multiple",
                contact_info=rec.get("contactInfo"),
            )
            self.session.add(row)
            rows.append(row)
        await self.session.flush()
        return rows

    async def list_share_history(self) -> list[ShareRecord]:
        result = await self.session.execute(select(ShareRecord).order_by(ShareRecord.seq.desc()))
        return list(result.scalars().all())

    async def add_document_renewal(
        self,
        document: dict[str, Any],
        renew_again: bool,
        next_renewal_date: Optional[str],
        new_file: Optional[str],
    ) -> DocumentRenewalRecord:
        """Snapshot of a display-shaped document at the time it was renewed."""
        row = DocumentRenewalRecord(
            id=f"renewal-{uuid.uuid4().hex[:12]}",
            seq=await self._allocate(DOCUMENT_RENEWAL_COUNTER),
            document_id=document["id"],
            sn=document.get("sn") or "",
            document_name=document.get("documentName") or "",
            document_type=document.get("documentType"),
            category=document.get("category"),
            company_name=document.get("companyName"),
            entry_date=document.get("date"),
            old_renewal_date=document.get("renewalDate") or "-",
            old_file=document.get("file"),
            renewal_status="Yes" if renew_again else "No",
            next_renewal_date=next_renewal_date if renew_again else None,
            new_file=new_file or None,
        )
        self.session.add(row)
        await self.session.flush()
        return row

    async def list_document_renewals(self) -> list[DocumentRenewalRecord]:
        result = await self.session.execute(
            select(DocumentRenewalRecord).order_by(DocumentRenewalRecord.seq.desc())
        )
        return list(result.scalars().all())

    async def add_subscription_renewal(
        self,
        subscription: dict[str, Any],
        renewal_status: str,
        new_end_date: Optional[str],
    ) -> SubscriptionRenewalRecord:
        seq = await self._allocate(SUBSCRIPTION_RENEWAL_COUNTER)
        row = SubscriptionRenewalRecord(
            id=f"sub-renewal-{uuid.uuid4().hex[:12]}",
            seq=seq,
            renewal_no=f"RN-{seq:03d}",
            subscription_id=subscription["id"],
            sn=subscription.get("sn") or "",
            company_name=subscription.get("companyName"),
            subscriber_name=subscription.get("subscriberName"),
            subscription_name=subscription.get("subscriptionName"),
            frequency=subscription.get("frequency"),
            price=subscription.get("price"),
            end_date=subscription.get("endDate"),
            new_end_date=new_end_date,
            renewal_status=renewal_status,
        )
        self.session.add(row)
        await self.session.flush()
        return row

    async def list_subscription_renewals(self) -> list[SubscriptionRenewalRecord]:
        result = await self.session.execute(
            select(SubscriptionRenewalRecord).order_by(SubscriptionRenewalRecord.seq.desc())
        )
        return list(result.scalars().all())

    # --- master lookups ---

    async def add_master_items(self, triples: Iterable[tuple[str, str, str]]) -> list[MasterLookup]:
        """Append unseen (company, document type, category) triples; case-insensitive."""
        result = await self.session.execute(select(MasterLookup.lookup_key))
        seen = set(result.scalars().all())
        added: list[MasterLookup] = []
        for company_name, document_type, category in triples:
            if not (company_name and document_type and category):
                continue
            key = master_key(company_name, document_type, category)
            if key in seen:
                continue
            seen.add(key)
            row = MasterLookup(
                id=f"master-{uuid.uuid4().hex[:12]}",
                company_name=company_name.strip(),
                document_type=document_type.strip(),
                category=category.strip(),
                lookup_key=key,
            )
            self.session.add(row)
            added.append(row)
        await self.session.flush()
        return added

    async def list_master_items(self) -> list[MasterLookup]:
        result = await self.session.execute(select(MasterLookup).order_by(MasterLookup.created_at, MasterLookup.id))
        return list(result.scalars().all())
