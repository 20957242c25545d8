import logging
from datetime import date
from typing import Any, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_loans_client, get_store, require_access
from clients import LoansClient
from schemas.loan import ForeclosureCreate, LoanCreate, LoanUpdate, NocSubmit
from schemas.user import CurrentUser
from services.loaders import load_loans
from services.mappers import map_foreclosure, map_loan, map_noc
from services.status import clean_amount
from services.store import LOANS, DataStore
from services.views import (
    LOAN_SEARCH_FIELDS,
    distinct_values,
    filter_items,
    foreclosure_pending,
    noc_done,
    noc_pending,
    split_by,
)

router = APIRouter(prefix="/api/loans", tags=["loans"])

logger = logging.getLogger("docmgr.loans")

MSG_LOAN_NOT_FOUND = "Loan not found"
MSG_FORECLOSURE_EXISTS = "Foreclosure already requested for this loan"

LoanUser = Depends(require_access("Loan"))


def _amount(value: Any, field: str) -> float:
    try:
        return clean_amount(value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid {field}") from e


def _loan_payload(body: LoanCreate | LoanUpdate) -> dict[str, Any]:
    fields = {
        "loan_name": body.loan_name,
        "bank_name": body.bank_name,
        "amount": None if body.amount is None else _amount(body.amount, "amount"),
        "emi": None if body.emi is None else _amount(body.emi, "EMI"),
        "loan_start_date": body.start_date,
        "loan_end_date": body.end_date,
        "provided_document_name": body.provided_document,
        "upload_document": body.upload_document,
        "remarks": body.remarks,
    }
    return {k: v for k, v in fields.items() if v is not None}


@router.get("", response_model=dict)
async def list_loans(
    search: Optional[str] = None,
    bank: Optional[str] = None,
    _: CurrentUser = LoanUser,
    client: LoansClient = Depends(get_loans_client),
    store: DataStore = Depends(get_store),
):
    loans = await load_loans(client)
    await store.replace_collection(LOANS, loans)
    items = filter_items(loans, search, LOAN_SEARCH_FIELDS, bankName=bank)
    return {"items": items, "banks": distinct_values(loans, "bankName"), "total": len(loans)}


@router.post("", response_model=dict, status_code=201)
async def create_loan(body: LoanCreate, _: CurrentUser = LoanUser, client: LoansClient = Depends(get_loans_client)):
    created = await client.create_loan(_loan_payload(body))
    logger.info("loan_created id=%s", created.get("id"))
    return map_loan(created)


# --- foreclosure ---


@router.get("/foreclosure", response_model=dict)
async def foreclosure(
    tab: Literal["pending", "history"] = "pending",
    search: Optional[str] = None,
    _: CurrentUser = LoanUser,
    client: LoansClient = Depends(get_loans_client),
):
    pending, history = split_by(await load_loans(client), foreclosure_pending)
    items = filter_items(pending if tab == "pending" else history, search, LOAN_SEARCH_FIELDS)
    return {"tab": tab, "items": items, "total": len(items)}


@router.post("/foreclosure", response_model=dict, status_code=201)
async def request_foreclosure(
    body: ForeclosureCreate,
    _: CurrentUser = LoanUser,
    client: LoansClient = Depends(get_loans_client),
):
    loans = {l["id"]: l for l in await load_loans(client)}
    loan = loans.get(body.loan_id)
    if loan is None:
        raise HTTPException(status_code=404, detail=MSG_LOAN_NOT_FOUND)
    if not foreclosure_pending(loan):
        raise HTTPException(status_code=400, detail=MSG_FORECLOSURE_EXISTS)
    payload = {
        "serial_no": loan["sn"],
        "loan_name": loan["loanName"],
        "bank_name": loan["bankName"],
        "amount": loan["amount"],
        "emi": loan["emi"],
        "loan_start_date": loan["startDate"],
        "loan_end_date": loan["endDate"],
        "request_date": body.request_date or date.today().isoformat(),
        "requester_name": body.requester_name,
    }
    created = await client.create_foreclosure_request(payload)
    logger.info("foreclosure_requested serial_no=%s", loan["sn"])
    return map_foreclosure(created)


# --- NOC ---


@router.get("/noc", response_model=dict)
async def noc(
    tab: Literal["pending", "history", "all"] = "pending",
    search: Optional[str] = None,
    _: CurrentUser = LoanUser,
    client: LoansClient = Depends(get_loans_client),
):
    if tab == "all":
        records = [map_noc(r) for r in await client.all_noc_records()]
        items = filter_items(records, search, ("serialNo", "loanName", "bankName"))
        return {"tab": tab, "items": items, "total": len(items)}
    loans = await load_loans(client)
    chosen = [l for l in loans if (noc_pending(l) if tab == "pending" else noc_done(l))]
    items = filter_items(chosen, search, LOAN_SEARCH_FIELDS)
    return {"tab": tab, "items": items, "total": len(items)}


@router.post("/noc", response_model=dict)
async def collect_noc(body: NocSubmit, _: CurrentUser = LoanUser, client: LoansClient = Depends(get_loans_client)):
    loans = {l["sn"]: l for l in await load_loans(client)}
    loan = loans.get(body.serial_no)
    if loan is None:
        raise HTTPException(status_code=404, detail=MSG_LOAN_NOT_FOUND)
    payload = {
        "serial_no": body.serial_no,
        "loan_name": loan["loanName"],
        "bank_name": loan["bankName"],
        "loan_start_date": loan["startDate"],
        "loan_end_date": loan["endDate"],
        "closure_request_date": loan.get("closerRequestDate") or loan.get("requestDate") or date.today().isoformat(),
        "collect_noc": body.collect_noc,
    }
    saved = await client.save_noc(payload)
    logger.info("noc_saved serial_no=%s collect_noc=%s", body.serial_no, body.collect_noc)
    return map_noc(saved)


# --- single loan ---


@router.get("/{loan_id}", response_model=dict)
async def get_loan(loan_id: int, _: CurrentUser = LoanUser, client: LoansClient = Depends(get_loans_client)):
    loan = await client.get_loan(loan_id)
    if not loan:
        raise HTTPException(status_code=404, detail=MSG_LOAN_NOT_FOUND)
    return map_loan(loan)


@router.put("/{loan_id}", response_model=dict)
async def update_loan(
    loan_id: int,
    body: LoanUpdate,
    _: CurrentUser = LoanUser,
    client: LoansClient = Depends(get_loans_client),
):
    updated = await client.update_loan(loan_id, _loan_payload(body))
    return map_loan(updated or {"id": loan_id})


@router.delete("/{loan_id}", status_code=204)
async def delete_loan(loan_id: int, _: CurrentUser = LoanUser, client: LoansClient = Depends(get_loans_client)):
    await client.delete_loan(loan_id)
    logger.info("loan_deleted id=%s", loan_id)
