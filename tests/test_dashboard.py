import unittest
from datetime import date

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from clients import DocumentsClient, LoansClient, MasterClient, SubscriptionsClient
from database import Base
from services.dashboard import build_dashboard, summarize, upcoming_renewals
from services.store import DOCUMENTS, LOANS, DataStore
from tests.fakes import FakeBackend

TODAY = date(2025, 1, 10)

DOCUMENTS_DATA = [
    {"id": "1", "sn": "SN-001", "category": "Company", "needsRenewal": True, "renewalDate": "2025-01-20", "date": "2024-12-01"},
    {"id": "2", "sn": "SN-002", "category": "Company", "needsRenewal": True, "renewalDate": "2024-12-31", "date": "2024-11-01"},
    {"id": "3", "sn": "SN-003", "category": None, "needsRenewal": False, "renewalDate": None, "date": "2024-10-01"},
]
SUBSCRIPTIONS_DATA = [
    {"id": "1", "status": "Paid", "price": "₹1,200", "frequency": "Yearly", "requestedDate": "2024-12-05"},
    {"id": "2", "status": "Pending", "price": "₹500", "frequency": "Monthly", "requestedDate": "2025-01-02"},
    {"id": "3", "status": "Rejected", "price": "300", "frequency": "Quarterly", "requestedDate": "2024-09-01"},
]
LOANS_DATA = [
    {"id": "1", "bankName": "HDFC", "loanStatus": "Active", "collectNocStatus": None, "startDate": "2023-01-01"},
    {"id": "2", "bankName": "ICICI", "loanStatus": "Closed", "collectNocStatus": "Yes", "startDate": "2021-06-15"},
]


class TestSummarize(unittest.TestCase):
    def setUp(self):
        self.summary = summarize(DOCUMENTS_DATA, SUBSCRIPTIONS_DATA, LOANS_DATA, [], TODAY)

    def test_totals(self):
        totals = self.summary["totals"]
        self.assertEqual(totals["documents"], 3)
        self.assertEqual(totals["renewals"], 2)
        self.assertEqual(totals["pendingApprovals"], 1)
        self.assertEqual(totals["nocCompleted"], 1)

    def test_monthly_cost(self):
        self.assertEqual(self.summary["monthlySubscriptionCost"], 700.0)

    def test_charts_omit_empty_buckets(self):
        subs = self.summary["charts"]["subscriptionStatus"]
        self.assertEqual([s["name"] for s in subs], ["Active", "Pending", "Rejected"])
        self.assertEqual(subs[0]["color"], "#10B981")
        docs = {d["name"]: d["value"] for d in self.summary["charts"]["documentStatus"]}
        self.assertEqual(docs, {"Active": 1, "Expiring": 1, "Expired": 1})
        loans = [l["name"] for l in self.summary["charts"]["loanStatus"]]
        self.assertEqual(loans, ["Active", "Closed"])

    def test_breakdowns(self):
        breakdowns = self.summary["breakdowns"]
        self.assertEqual(breakdowns["documents"][0], {"label": "Company", "count": 2})
        self.assertEqual(breakdowns["noc"], [{"label": "ICICI", "count": 1}])
        self.assertEqual(breakdowns["approvals"], [{"label": "Monthly", "count": 1}])

    def test_recent_activity_newest_first(self):
        activity = self.summary["recentActivity"]
        self.assertEqual(activity[0]["type"], "subscription")
        self.assertEqual(activity[0]["date"], "2025-01-02")

    def test_upcoming_renewals_skip_past(self):
        upcoming = upcoming_renewals(DOCUMENTS_DATA, TODAY)
        self.assertEqual([u["id"] for u in upcoming], ["1"])
        self.assertEqual(upcoming[0]["daysLeft"], 10)

    def test_upcoming_limit(self):
        docs = [
            {"id": str(i), "needsRenewal": True, "renewalDate": f"2025-02-{i:02d}"} for i in range(1, 13)
        ]
        upcoming = upcoming_renewals(docs, TODAY)
        self.assertEqual(len(upcoming), 8)
        self.assertEqual(upcoming[0]["id"], "1")


class TestBuildDashboard(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self.session = async_sessionmaker(self.engine, expire_on_commit=False)()
        self.store = DataStore(self.session)

    async def asyncTearDown(self):
        await self.session.close()
        await self.engine.dispose()

    async def _build(self, fake: FakeBackend):
        backend = fake.client()
        try:
            return await build_dashboard(
                DocumentsClient(backend),
                SubscriptionsClient(backend),
                LoansClient(backend),
                MasterClient(backend),
                self.store,
                today=TODAY,
            )
        finally:
            await backend.aclose()

    async def test_failed_fetch_falls_back_to_cache(self):
        await self.store.replace_collection(LOANS, [{"id": "9", "bankName": "SBI", "loanStatus": "Active"}])
        fake = FakeBackend(
            {
                ("GET", "/documents/"): {"documents": [{"document_id": 1, "document_name": "GST", "need_renewal": "no"}]},
                ("GET", "/subscription/all"): [{"id": 1, "subscription_no": "S1", "price": "100", "frequency": "Monthly"}],
                ("GET", "/subscription-approval/history"): [],
                ("GET", "/loans"): (500, {"error": "db down"}),
                ("GET", "/loans/foreclosure/history"): {"history": []},
                ("GET", "/loans/noc/all"): {"records": []},
                ("GET", "/master"): {"data": []},
            }
        )
        summary = await self._build(fake)
        self.assertEqual(summary["staleCollections"], [LOANS])
        self.assertEqual(summary["totals"]["loans"], 1)
        self.assertEqual(summary["breakdowns"]["loans"], [{"label": "SBI", "count": 1}])
        self.assertEqual(summary["totals"]["documents"], 1)
        # Successful fetches replace the cache
        cached = await self.store.get_collection(DOCUMENTS)
        self.assertEqual(cached[0]["sn"], "SN-001")

    async def test_several_failed_collections_served_from_cache(self):
        await self.store.replace_collection(DOCUMENTS, DOCUMENTS_DATA)
        await self.store.replace_collection(LOANS, LOANS_DATA)
        fake = FakeBackend(
            {
                ("GET", "/subscription/all"): [],
                ("GET", "/subscription-approval/history"): [],
                ("GET", "/master"): {"data": []},
            }
        )
        summary = await self._build(fake)
        self.assertEqual(summary["staleCollections"], [DOCUMENTS, LOANS])
        self.assertEqual(summary["totals"]["documents"], 3)
        self.assertEqual(summary["totals"]["loans"], 2)
        self.assertEqual(summary["totals"]["subscriptions"], 0)

    async def test_failed_fetch_without_cache_is_empty(self):
        fake = FakeBackend({("GET", "/subscription-approval/history"): []})
        summary = await self._build(fake)
        self.assertEqual(sorted(summary["staleCollections"]), ["documents", "loans", "master", "subscriptions"])
        self.assertEqual(summary["totals"]["documents"], 0)
        self.assertEqual(summary["charts"]["documentStatus"], [])


if __name__ == "__main__":
    unittest.main()
