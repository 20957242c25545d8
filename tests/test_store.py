import asyncio
import unittest

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from database import Base
from services.store import DOCUMENTS, LOANS, DataStore


class StoreTestCase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self.session: AsyncSession = async_sessionmaker(self.engine, expire_on_commit=False)()
        self.store = DataStore(self.session)

    async def asyncTearDown(self):
        await self.session.close()
        await self.engine.dispose()


class TestCachedCollections(StoreTestCase):
    async def test_never_fetched_is_none(self):
        self.assertIsNone(await self.store.get_collection(DOCUMENTS))

    async def test_replace_is_whole_collection(self):
        await self.store.replace_collection(DOCUMENTS, [{"id": "1"}, {"id": "2"}])
        await self.store.replace_collection(DOCUMENTS, [{"id": "3"}])
        self.assertEqual(await self.store.get_collection(DOCUMENTS), [{"id": "3"}])

    async def test_empty_fetch_is_cached_as_empty(self):
        await self.store.replace_collection(LOANS, [])
        self.assertEqual(await self.store.get_collection(LOANS), [])

    async def test_get_collections(self):
        await self.store.replace_collection(DOCUMENTS, [{"id": "1"}])
        found = await self.store.get_collections([DOCUMENTS, LOANS])
        self.assertEqual(found, {DOCUMENTS: [{"id": "1"}]})


class TestHistory(StoreTestCase):
    async def test_share_numbering_and_order(self):
        first = await self.store.add_share_records([{"docName": "A", "sharedVia": "Email", "recipientName": "Jo"}])
        second = await self.store.add_share_records(
            [{"docName": "B", "sharedVia": "Email"}, {"docName": "B", "sharedVia": "WhatsApp"}]
        )
        self.assertEqual(first[0].share_no, "SH-001")
        self.assertEqual([r.share_no for r in second], ["SH-002", "SH-003"])
        self.assertEqual(second[0].recipient_name, "Multiple")
        self.assertEqual(second[0].doc_serial, "SN-???")
        history = await self.store.list_share_history()
        self.assertEqual([r.share_no for r in history], ["SH-003", "SH-002", "SH-001"])

    async def test_document_renewal_snapshot(self):
        doc = {"id": "7", "sn": "SN-007", "documentName": "License", "renewalDate": None, "file": "old.pdf"}
        rec = await self.store.add_document_renewal(doc, False, "2026-01-01", None)
        self.assertEqual(rec.renewal_status, "No")
        self.assertIsNone(rec.next_renewal_date)
        self.assertEqual(rec.old_renewal_date, "-")
        rec = await self.store.add_document_renewal(doc, True, "2026-01-01", "new.pdf")
        self.assertEqual(rec.renewal_status, "Yes")
        self.assertEqual(rec.next_renewal_date, "2026-01-01")
        renewals = await self.store.list_document_renewals()
        self.assertEqual(renewals[0].id, rec.id)

    async def test_subscription_renewal_numbering(self):
        sub = {"id": "3", "sn": "SN-003", "subscriptionName": "Zoho One", "endDate": "2025-01-31"}
        a = await self.store.add_subscription_renewal(sub, "Approved", "2025-02-28")
        b = await self.store.add_subscription_renewal(sub, "Rejected", None)
        self.assertEqual((a.renewal_no, b.renewal_no), ("RN-001", "RN-002"))
        self.assertEqual([r.renewal_no for r in await self.store.list_subscription_renewals()], ["RN-002", "RN-001"])

    async def test_concurrent_sessions_never_share_a_number(self):
        other = async_sessionmaker(self.engine, expire_on_commit=False)()
        batch = [{"docName": "A", "sharedVia": "Email"}, {"docName": "A", "sharedVia": "WhatsApp"}]

        first, second = await asyncio.gather(
            self.store.add_share_records(batch),
            DataStore(other).add_share_records(batch),
        )
        await self.session.commit()
        await other.commit()

        numbers = [r.seq for r in first] + [r.seq for r in second]
        self.assertEqual(sorted(numbers), [1, 2, 3, 4])
        # Each call gets a consecutive block
        self.assertEqual(first[1].seq - first[0].seq, 1)
        self.assertEqual(second[1].seq - second[0].seq, 1)
        history = await self.store.list_share_history()
        self.assertEqual([r.share_no for r in history], ["SH-004", "SH-003", "SH-002", "SH-001"])
        await other.close()

    async def test_renewal_numbers_survive_concurrent_calls(self):
        other = async_sessionmaker(self.engine, expire_on_commit=False)()
        sub = {"id": "3", "sn": "SN-003"}
        a, b = await asyncio.gather(
            self.store.add_subscription_renewal(sub, "Approved", None),
            DataStore(other).add_subscription_renewal(sub, "Rejected", None),
        )
        self.assertEqual(sorted([a.renewal_no, b.renewal_no]), ["RN-001", "RN-002"])
        await other.close()


class TestMasterLookups(StoreTestCase):
    async def test_case_insensitive_dedup(self):
        added = await self.store.add_master_items(
            [
                ("Acme", "GST", "Company"),
                ("ACME ", "gst", "company"),
                ("Acme", "PAN", "Company"),
                ("", "PAN", "Company"),
            ]
        )
        self.assertEqual(len(added), 2)
        again = await self.store.add_master_items([("acme", "Gst", "COMPANY")])
        self.assertEqual(again, [])
        self.assertEqual(len(await self.store.list_master_items()), 2)


if __name__ == "__main__":
    unittest.main()
