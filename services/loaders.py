"""Fetch a whole backend collection and map it to display shape."""
from __future__ import annotations

import asyncio
from typing import Any

from clients import DocumentsClient, LoansClient, MasterClient, SubscriptionsClient
from services.mappers import latest_approvals, map_document, map_loan, map_master, map_subscription


async def load_documents(client: DocumentsClient) -> list[dict[str, Any]]:
    return [map_document(d) for d in await client.list_documents()]


async def load_subscriptions(client: SubscriptionsClient) -> list[dict[str, Any]]:
    """Subscriptions joined with approval history so Rejected can be told from Approved."""
    subscriptions, history = await asyncio.gather(client.list_subscriptions(), client.approval_history())
    decisions = latest_approvals(history)
    return [map_subscription(s, decisions.get(s.get("subscription_no"))) for s in subscriptions]


async def load_loans(client: LoansClient) -> list[dict[str, Any]]:
    """Loans with their foreclosure request and NOC record, matched by serial number."""
    loans, foreclosures, nocs = await asyncio.gather(
        client.list_loans(), client.foreclosure_history(), client.all_noc_records()
    )
    by_serial_fc = {f.get("serial_no"): f for f in foreclosures}
    by_serial_noc = {n.get("serial_no"): n for n in nocs}
    out = []
    for loan in loans:
        sn = map_loan(loan)["sn"]
        out.append(map_loan(loan, by_serial_fc.get(sn), by_serial_noc.get(sn)))
    return out


async def load_master(client: MasterClient) -> list[dict[str, Any]]:
    return [map_master(r) for r in await client.list_records()]
