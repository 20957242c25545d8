"""
Payment requests moving through approval, make-payment and tally-entry.
Each stage has a pending list, a history list and a process action.
"""
import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_payments_client, require_access
from clients import PaymentsClient
from schemas.payment import ApprovalProcess, MakePaymentProcess, PaymentRequestCreate, TallyEntryProcess
from schemas.user import CurrentUser
from services.mappers import transform_payment
from services.views import filter_items

router = APIRouter(prefix="/api/payments", tags=["payments"])

logger = logging.getLogger("docmgr.payments")

PAYMENT_SEARCH_FIELDS = ("uniqueNo", "fmsName", "payTo")

MSG_REQUIRED_FIELDS = "Please fill all required fields"

PaymentUser = Depends(require_access("Payment"))

Tab = Literal["pending", "history"]


def _view(items, tab: str, search: Optional[str]) -> dict:
    out = filter_items([transform_payment(i) for i in items], search, PAYMENT_SEARCH_FIELDS)
    return {"tab": tab, "items": out, "total": len(out)}


@router.get("", response_model=dict)
async def list_requests(
    search: Optional[str] = None,
    _: CurrentUser = PaymentUser,
    client: PaymentsClient = Depends(get_payments_client),
):
    items = filter_items([transform_payment(i) for i in await client.list_all()], search, PAYMENT_SEARCH_FIELDS)
    return {"items": items, "total": len(items)}


@router.post("", response_model=dict, status_code=201)
async def create_request(
    body: PaymentRequestCreate,
    _: CurrentUser = PaymentUser,
    client: PaymentsClient = Depends(get_payments_client),
):
    if not (body.fms_name.strip() and body.pay_to.strip() and body.amount and body.unique_no):
        raise HTTPException(status_code=400, detail=MSG_REQUIRED_FIELDS)
    created = await client.create(body.model_dump(by_alias=True))
    logger.info("payment_request_created unique_no=%s", body.unique_no)
    return transform_payment(created or {})


@router.delete("/{request_id}", status_code=204)
async def delete_request(request_id: str, _: CurrentUser = PaymentUser, client: PaymentsClient = Depends(get_payments_client)):
    await client.delete(request_id)
    logger.info("payment_request_deleted id=%s", request_id)


# --- stage 1: approval ---


@router.get("/approval", response_model=dict)
async def approval(
    tab: Tab = "pending",
    search: Optional[str] = None,
    _: CurrentUser = PaymentUser,
    client: PaymentsClient = Depends(get_payments_client),
):
    items = await (client.approval_pending() if tab == "pending" else client.approval_history())
    return _view(items, tab, search)


@router.patch("/approval/{request_id}", response_model=dict)
async def process_approval(
    request_id: str,
    body: ApprovalProcess,
    _: CurrentUser = PaymentUser,
    client: PaymentsClient = Depends(get_payments_client),
):
    result = await client.process_approval(request_id, body.status, body.stage_remarks)
    logger.info("payment_approval id=%s status=%s", request_id, body.status)
    return transform_payment(result or {"id": request_id})


# --- stage 2: make payment ---


@router.get("/make-payment", response_model=dict)
async def make_payment(
    tab: Tab = "pending",
    search: Optional[str] = None,
    _: CurrentUser = PaymentUser,
    client: PaymentsClient = Depends(get_payments_client),
):
    items = await (client.make_payment_pending() if tab == "pending" else client.make_payment_history())
    return _view(items, tab, search)


@router.patch("/make-payment/{request_id}", response_model=dict)
async def process_make_payment(
    request_id: str,
    body: MakePaymentProcess,
    _: CurrentUser = PaymentUser,
    client: PaymentsClient = Depends(get_payments_client),
):
    result = await client.process_make_payment(request_id, body.payment_type)
    logger.info("payment_made id=%s type=%s", request_id, body.payment_type)
    return transform_payment(result or {"id": request_id})


# --- stage 3: tally entry ---


@router.get("/tally-entry", response_model=dict)
async def tally_entry(
    tab: Tab = "pending",
    search: Optional[str] = None,
    _: CurrentUser = PaymentUser,
    client: PaymentsClient = Depends(get_payments_client),
):
    items = await (client.tally_entry_pending() if tab == "pending" else client.tally_entry_history())
    return _view(items, tab, search)


@router.post("/tally-entry", response_model=dict)
async def process_tally_entry(
    body: TallyEntryProcess,
    _: CurrentUser = PaymentUser,
    client: PaymentsClient = Depends(get_payments_client),
):
    processed = await client.process_tally_entry(body.ids)
    logger.info("tally_entries_processed count=%s", len(body.ids))
    return {"items": [transform_payment(i) for i in processed], "total": len(processed)}
