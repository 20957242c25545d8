"""
Seed the local cache with demo collections so the dashboard has something to
fall back on before the backend has ever been reached.
Run: python -m scripts.seed_cache (from the project root).
"""
import asyncio
import os
import sys

# Add parent so we can import the app modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database import AsyncSessionLocal, init_db
from services.mappers import map_document, map_loan, map_master, map_subscription
from services.store import DOCUMENTS, LOANS, MASTER, SUBSCRIPTIONS, DataStore

# Backend-shaped records; mapped exactly as a live fetch would be
DOCUMENTS_DATA = [
    {
        "document_id": 1,
        "document_name": "GST Registration Certificate",
        "document_type": "Certificate",
        "category": "Company",
        "person_name": "Acme Industries",
        "company_department": "Acme Industries",
        "need_renewal": "no",
        "image": "https://bucket.s3.amazonaws.com/docs/gst-certificate.pdf",
        "created_at": "2024-01-15T09:30:00Z",
    },
    {
        "document_id": 2,
        "document_name": "Factory License",
        "document_type": "License",
        "category": "Company",
        "person_name": "Acme Industries",
        "need_renewal": "yes",
        "renewal_date": "2025-03-31",
        "image": "https://bucket.s3.amazonaws.com/docs/factory-license.pdf",
        "created_at": "2024-02-01T10:00:00Z",
    },
    {
        "document_id": 3,
        "document_name": "Director PAN Card",
        "document_type": "Identity",
        "category": "Director",
        "person_name": "Ravi Kumar",
        "need_renewal": "no",
        "created_at": "2024-02-20T11:15:00Z",
    },
]

SUBSCRIPTIONS_DATA = [
    {
        "id": 1,
        "subscription_no": "SUB-001",
        "company_name": "Reliance Jio Infocomm",
        "subscriber_name": "IT Department",
        "subscription_name": "JioFiber Postpaid",
        "price": "₹999",
        "frequency": "Monthly",
        "purpose": "Office internet",
        "timestamp": "2024-01-05T08:00:00Z",
        "actual_2": "2024-01-06",
        "actual_3": "2024-01-07",
        "start_date": "2024-01-07",
        "end_date": "2024-02-07",
    },
    {
        "id": 2,
        "subscription_no": "SUB-002",
        "company_name": "Tata AIG General Insurance",
        "subscriber_name": "HR",
        "subscription_name": "Health Insurance",
        "price": "₹12,499",
        "frequency": "Yearly",
        "purpose": "Staff cover",
        "timestamp": "2024-03-01T08:00:00Z",
        "actual_2": "2024-03-02",
    },
    {
        "id": 3,
        "subscription_no": "SUB-003",
        "company_name": "Zoho Corporation",
        "subscriber_name": "Accounts",
        "subscription_name": "Zoho One",
        "price": "₹1,500",
        "frequency": "Monthly",
        "purpose": "Accounting suite",
        "timestamp": "2024-04-10T08:00:00Z",
    },
]

LOANS_DATA = [
    {
        "id": 1,
        "loan_name": "Machinery Loan",
        "bank_name": "HDFC Bank",
        "amount": 1_200_000,
        "emi": 25_000,
        "loan_start_date": "2022-04-01",
        "loan_end_date": "2026-03-31",
        "provided_document_name": "Hypothecation deed",
    },
    {
        "id": 2,
        "loan_name": "Vehicle Loan",
        "bank_name": "ICICI Bank",
        "amount": 800_000,
        "emi": 18_500,
        "loan_start_date": "2021-06-15",
        "loan_end_date": "2024-06-15",
        "final_settlement_status": "yes",
        "collect_noc": True,
    },
]

MASTER_DATA = [
    {"id": 1, "company_name": "Acme Industries", "document_type": "License", "category": "Company", "renewal_filter": True},
    {"id": 2, "company_name": "Acme Industries", "document_type": "Certificate", "category": "Company"},
    {"id": 3, "company_name": "Ravi Kumar", "document_type": "Identity", "category": "Director"},
]


async def seed():
    await init_db()
    async with AsyncSessionLocal() as session:
        store = DataStore(session)
        collections = {
            DOCUMENTS: [map_document(d) for d in DOCUMENTS_DATA],
            SUBSCRIPTIONS: [map_subscription(s) for s in SUBSCRIPTIONS_DATA],
            LOANS: [map_loan(l) for l in LOANS_DATA],
            MASTER: [map_master(m) for m in MASTER_DATA],
        }
        for key, items in collections.items():
            if await store.get_collection(key) is not None:
                print(f"Collection {key} already cached, skipping")
                continue
            await store.replace_collection(key, items)
            print(f"Seeded {key}: {len(items)} items")
        added = await store.add_master_items(
            (m["company_name"], m["document_type"], m["category"]) for m in MASTER_DATA
        )
        print(f"Seeded master lookups: {len(added)} new")
        await session.commit()
    print("Seed complete.")


if __name__ == "__main__":
    asyncio.run(seed())
