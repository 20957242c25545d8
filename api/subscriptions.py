import logging
from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_store, get_subscriptions_client, require_access
from clients import SubscriptionsClient
from config import settings
from schemas.subscription import ApprovalSubmit, PaymentSubmit, RenewalSubmit, SubscriptionCreate
from schemas.user import CurrentUser
from services.loaders import load_subscriptions
from services.mappers import map_subscription, subscription_renewal_to_dict
from services.status import extend_end_date, is_renewal_due, renewal_planned_date
from services.store import SUBSCRIPTIONS, DataStore
from services.views import SUBSCRIPTION_SEARCH_FIELDS, distinct_values, filter_items
from utils.case import dict_keys_to_camel

router = APIRouter(prefix="/api/subscriptions", tags=["subscriptions"])

logger = logging.getLogger("docmgr.subscriptions")

MSG_PAYMENT_DATES = "Start date and end date are required"
MSG_NOT_PENDING_RENEWAL = "Subscription is not pending renewal"

SubscriptionUser = Depends(require_access("Subscription"))

Tab = Literal["pending", "history"]


def _renewal_candidate(raw: dict) -> dict:
    out = map_subscription(raw)
    planned = renewal_planned_date(raw)
    out["plannedRenewalDate"] = planned.isoformat() if planned else ""
    return out


@router.get("", response_model=dict)
async def list_subscriptions(
    search: Optional[str] = None,
    frequency: Optional[str] = None,
    _: CurrentUser = SubscriptionUser,
    client: SubscriptionsClient = Depends(get_subscriptions_client),
    store: DataStore = Depends(get_store),
):
    subscriptions = await load_subscriptions(client)
    await store.replace_collection(SUBSCRIPTIONS, subscriptions)
    items = filter_items(subscriptions, search, SUBSCRIPTION_SEARCH_FIELDS, frequency=frequency)
    return {"items": items, "frequencies": distinct_values(subscriptions, "frequency"), "total": len(subscriptions)}


@router.post("", response_model=dict, status_code=201)
async def create_subscription(
    body: SubscriptionCreate,
    _: CurrentUser = SubscriptionUser,
    client: SubscriptionsClient = Depends(get_subscriptions_client),
):
    """Reserve the next subscription number upstream, then create the request."""
    number = await client.generate_number()
    payload = {
        "timestamp": body.timestamp or datetime.now().isoformat(timespec="seconds"),
        "subscriptionNo": number,
        "companyName": body.company_name,
        "subscriberName": body.subscriber_name,
        "subscriptionName": body.subscription_name,
        "price": body.price,
        "frequency": body.frequency,
        "purpose": body.purpose,
    }
    created = await client.create_subscription(payload)
    logger.info("subscription_created subscription_no=%s", number)
    return {"subscriptionNo": number, "result": created}


# --- approval ---


@router.get("/approvals", response_model=dict)
async def approvals(
    tab: Tab = "pending",
    search: Optional[str] = None,
    _: CurrentUser = SubscriptionUser,
    client: SubscriptionsClient = Depends(get_subscriptions_client),
):
    if tab == "pending":
        items = [map_subscription(s) for s in await client.pending_approvals()]
        items = filter_items(items, search, SUBSCRIPTION_SEARCH_FIELDS)
    else:
        items = filter_items(dict_keys_to_camel(await client.approval_history()), search, ("subscriptionNo", "approvedBy"))
    return {"tab": tab, "items": items, "total": len(items)}


@router.post("/approvals", response_model=dict)
async def submit_approval(
    body: ApprovalSubmit,
    user: CurrentUser = SubscriptionUser,
    client: SubscriptionsClient = Depends(get_subscriptions_client),
):
    payload = {
        "subscriptionNo": body.subscription_no,
        "approval": body.approval,
        "note": body.note,
        "approvedBy": body.approved_by or user.username,
        "requestedOn": body.requested_on or datetime.now().isoformat(timespec="seconds"),
    }
    result = await client.submit_approval(payload)
    logger.info("subscription_approval subscription_no=%s decision=%s", body.subscription_no, body.approval)
    return {"result": result}


# --- payment ---


@router.get("/payments", response_model=dict)
async def payments(
    tab: Tab = "pending",
    search: Optional[str] = None,
    _: CurrentUser = SubscriptionUser,
    client: SubscriptionsClient = Depends(get_subscriptions_client),
):
    if tab == "pending":
        items = [map_subscription(s) for s in await client.pending_payments()]
        items = filter_items(items, search, SUBSCRIPTION_SEARCH_FIELDS)
    else:
        items = filter_items(dict_keys_to_camel(await client.payment_history()), search, ("subscriptionNo", "transactionId"))
    return {"tab": tab, "items": items, "total": len(items)}


@router.post("/payments", response_model=dict)
async def submit_payment(
    body: PaymentSubmit,
    _: CurrentUser = SubscriptionUser,
    client: SubscriptionsClient = Depends(get_subscriptions_client),
):
    if not body.start_date or not body.end_date:
        raise HTTPException(status_code=400, detail=MSG_PAYMENT_DATES)
    payload = {
        "subscriptionNo": body.subscription_no,
        "paymentMethod": body.payment_method,
        "transactionId": body.transaction_id,
        "price": body.price,
        "startDate": body.start_date,
        "endDate": body.end_date,
        "insuranceDocument": body.insurance_document,
        # The backend reads this one key in snake_case
        "planned_1": body.planned_1 or body.end_date,
    }
    result = await client.submit_payment(payload)
    logger.info("subscription_payment subscription_no=%s", body.subscription_no)
    return {"result": result}


# --- renewal ---


@router.get("/renewals", response_model=dict)
async def pending_renewals(
    search: Optional[str] = None,
    _: CurrentUser = SubscriptionUser,
    client: SubscriptionsClient = Depends(get_subscriptions_client),
):
    """Renewal candidates whose planned date falls inside the renewal window."""
    window = settings.renewal_window_days
    due = [r for r in await client.pending_renewals() if is_renewal_due(renewal_planned_date(r), window_days=window)]
    items = filter_items([_renewal_candidate(r) for r in due], search, SUBSCRIPTION_SEARCH_FIELDS)
    return {"items": items, "total": len(items), "windowDays": window}


@router.get("/renewals/history", response_model=dict)
async def renewal_history(
    _: CurrentUser = SubscriptionUser,
    client: SubscriptionsClient = Depends(get_subscriptions_client),
    store: DataStore = Depends(get_store),
):
    upstream = dict_keys_to_camel(await client.renewal_history())
    local = [subscription_renewal_to_dict(r) for r in await store.list_subscription_renewals()]
    return {"upstream": upstream, "local": local}


@router.post("/renewals", response_model=dict)
async def submit_renewal(
    body: RenewalSubmit,
    user: CurrentUser = SubscriptionUser,
    client: SubscriptionsClient = Depends(get_subscriptions_client),
    store: DataStore = Depends(get_store),
):
    """
    Forward the renewal decision and keep a local RN-nnn record. An approved
    renewal carries the end date pushed out by one billing period.
    """
    candidates = {r.get("subscription_no"): r for r in await client.pending_renewals()}
    raw = candidates.get(body.subscription_no)
    if raw is None:
        raise HTTPException(status_code=404, detail=MSG_NOT_PENDING_RENEWAL)
    subscription = map_subscription(raw)

    new_end_date = None
    if body.renewal_status == "Approved":
        extended = extend_end_date(raw.get("end_date"), raw.get("frequency"))
        new_end_date = extended.isoformat() if extended else None

    payload = {
        "subscription_no": body.subscription_no,
        "renewal_status": body.renewal_status,
        "approved_by": body.approved_by or user.username,
        "price": body.price if body.price is not None else subscription["price"],
    }
    result = await client.submit_renewal(payload)
    record = await store.add_subscription_renewal(subscription, body.renewal_status, new_end_date)
    logger.info(
        "subscription_renewal subscription_no=%s status=%s renewal_no=%s",
        body.subscription_no, body.renewal_status, record.renewal_no,
    )
    return {"record": subscription_renewal_to_dict(record), "result": result}
