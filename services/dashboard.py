"""
Dashboard aggregation.

Fetches the four collections concurrently. A collection whose fetch fails is
logged and served from the local cache instead (its previous state); a
successful fetch replaces the cached copy. The summary is then computed from
display-shaped items only.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any, Awaitable, Callable, Optional

from clients import BackendError, DocumentsClient, LoansClient, MasterClient, SubscriptionsClient
from config import settings
from services.loaders import load_documents, load_loans, load_master, load_subscriptions
from services.status import document_expiry_bucket, monthly_cost
from services.store import DOCUMENTS, LOANS, MASTER, SUBSCRIPTIONS, DataStore
from services.views import approval_pending, group_counts
from utils.dates import parse_date

logger = logging.getLogger("docmgr.dashboard")

UPCOMING_LIMIT = 8
ACTIVITY_LIMIT = 8

SUBSCRIPTION_STATUS_COLORS = (
    ("Active", "#10B981"),
    ("Pending", "#F59E0B"),
    ("Approved", "#3B82F6"),
    ("Rejected", "#EF4444"),
)
DOCUMENT_STATUS_COLORS = (
    ("Active", "#3B82F6"),
    ("Expiring", "#F97316"),
    ("Expired", "#EF4444"),
)
LOAN_STATUS_COLORS = (
    ("Active", "#8B5CF6"),
    ("Foreclosure", "#EC4899"),
    ("Closed", "#6B7280"),
)


def _chart(counts: dict[str, int], palette) -> list[dict[str, Any]]:
    """Pie slices in palette order; empty buckets are left out."""
    return [
        {"name": name, "value": counts.get(name, 0), "color": color}
        for name, color in palette
        if counts.get(name, 0) > 0
    ]


def _subscription_bucket(sub: dict[str, Any]) -> str:
    status = sub.get("status") or "Pending"
    # Paid subscriptions are the running ones
    return "Active" if status == "Paid" else status


def _count_by(items, key_fn) -> dict[str, int]:
    counts: dict[str, int] = {}
    for item in items:
        k = key_fn(item)
        counts[k] = counts.get(k, 0) + 1
    return counts


def upcoming_renewals(
    documents: list[dict[str, Any]], today: Optional[date] = None, limit: int = UPCOMING_LIMIT
) -> list[dict[str, Any]]:
    """Nearest future renewal dates first, documents without a parseable date skipped."""
    today = today or date.today()
    dated = []
    for doc in documents:
        if not doc.get("needsRenewal"):
            continue
        renewal = parse_date(doc.get("renewalDate"))
        if renewal is None or renewal < today:
            continue
        dated.append((renewal, doc))
    dated.sort(key=lambda pair: (pair[0], pair[1].get("sn") or ""))
    return [
        {
            "id": doc["id"],
            "sn": doc.get("sn"),
            "documentName": doc.get("documentName"),
            "companyName": doc.get("companyName"),
            "renewalDate": renewal.isoformat(),
            "daysLeft": (renewal - today).days,
        }
        for renewal, doc in dated[:limit]
    ]


def recent_activity(
    documents: list[dict[str, Any]],
    subscriptions: list[dict[str, Any]],
    loans: list[dict[str, Any]],
    limit: int = ACTIVITY_LIMIT,
) -> list[dict[str, Any]]:
    """Latest entries across all three collections, newest first."""
    entries = (
        [
            {"type": "document", "id": d["id"], "title": "Document Added",
             "description": f"'{d.get('documentName')}' added for {d.get('companyName')}", "date": d.get("date")}
            for d in documents
        ]
        + [
            {"type": "subscription", "id": s["id"], "title": "Subscription Update",
             "description": f"Subscription for '{s.get('companyName')}' ({s.get('frequency')}) was updated",
             "date": s.get("requestedDate")}
            for s in subscriptions
        ]
        + [
            {"type": "loan", "id": l["id"], "title": "Loan Entry",
             "description": f"New loan record for '{l.get('loanName')}' at {l.get('bankName')}",
             "date": l.get("startDate")}
            for l in loans
        ]
    )
    entries.sort(key=lambda e: parse_date(e["date"]) or date.min, reverse=True)
    return entries[:limit]


def summarize(
    documents: list[dict[str, Any]],
    subscriptions: list[dict[str, Any]],
    loans: list[dict[str, Any]],
    master: list[dict[str, Any]],
    today: Optional[date] = None,
) -> dict[str, Any]:
    today = today or date.today()
    needing_renewal = [d for d in documents if d.get("needsRenewal")]
    pending = [s for s in subscriptions if approval_pending(s)]
    noc_completed = [l for l in loans if l.get("collectNocStatus") == "Yes"]

    doc_buckets = _count_by(
        documents,
        lambda d: document_expiry_bucket(d.get("renewalDate"), today, settings.expiry_window_days),
    )

    return {
        "totals": {
            "documents": len(documents),
            "subscriptions": len(subscriptions),
            "loans": len(loans),
            "masterRecords": len(master),
            "renewals": len(needing_renewal),
            "pendingApprovals": len(pending),
            "nocCompleted": len(noc_completed),
        },
        "monthlySubscriptionCost": round(sum(monthly_cost(s.get("price"), s.get("frequency")) for s in subscriptions), 2),
        "charts": {
            "subscriptionStatus": _chart(_count_by(subscriptions, _subscription_bucket), SUBSCRIPTION_STATUS_COLORS),
            "documentStatus": _chart(doc_buckets, DOCUMENT_STATUS_COLORS),
            "loanStatus": _chart(_count_by(loans, lambda l: l.get("loanStatus") or "Active"), LOAN_STATUS_COLORS),
        },
        "breakdowns": {
            "documents": group_counts(documents, "category", "Uncategorized"),
            "subscriptions": group_counts(subscriptions, "frequency", "Unknown"),
            "loans": group_counts(loans, "bankName", "Unknown Bank"),
            "renewals": group_counts(needing_renewal, "category", "Uncategorized"),
            "approvals": group_counts(pending, "frequency", "Unknown"),
            "noc": group_counts(noc_completed, "bankName", "Unknown Bank"),
        },
        "upcomingRenewals": upcoming_renewals(documents, today),
        "recentActivity": recent_activity(documents, subscriptions, loans),
    }


async def build_dashboard(
    documents_client: DocumentsClient,
    subscriptions_client: SubscriptionsClient,
    loans_client: LoansClient,
    master_client: MasterClient,
    store: DataStore,
    today: Optional[date] = None,
) -> dict[str, Any]:
    loaders: dict[str, Callable[[], Awaitable[list[dict[str, Any]]]]] = {
        DOCUMENTS: lambda: load_documents(documents_client),
        SUBSCRIPTIONS: lambda: load_subscriptions(subscriptions_client),
        LOANS: lambda: load_loans(loans_client),
        MASTER: lambda: load_master(master_client),
    }
    keys = list(loaders)
    results = await asyncio.gather(*(loaders[k]() for k in keys), return_exceptions=True)

    collections: dict[str, list[dict[str, Any]]] = {}
    stale: list[str] = []
    for key, result in zip(keys, results):
        if isinstance(result, BackendError):
            logger.warning("dashboard_fetch_failed collection=%s status=%s detail=%s", key, result.status_code, result.detail)
            stale.append(key)
        elif isinstance(result, BaseException):
            raise result
        else:
            await store.replace_collection(key, result)
            collections[key] = result

    if stale:
        cached = await store.get_collections(stale)
        for key in stale:
            collections[key] = cached.get(key, [])

    summary = summarize(
        collections[DOCUMENTS], collections[SUBSCRIPTIONS], collections[LOANS], collections[MASTER], today
    )
    summary["staleCollections"] = stale
    return summary
