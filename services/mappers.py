"""
Backend wire shape <-> display shape.

Backend records are snake_case with backend-specific names (document_id,
person_name, need_renewal, ...). Display records are camelCase dicts the UI
renders as-is. Derived fields (sn, status) are computed here on every mapping.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Optional

from models import DocumentRenewalRecord, ShareRecord, SubscriptionRenewalRecord
from schemas.document import DocumentEntry, DocumentUpdate
from services.status import derive_loan_status, derive_subscription_status, serial_number
from utils.case import pick
from utils.dates import date_part


def file_name_from_url(url: Optional[str]) -> Optional[str]:
    """Last path segment of an S3 URL; data URLs have no name."""
    if not url:
        return None
    if url.startswith("data:"):
        return "document"
    return url.rstrip("/").split("/")[-1] or "document"


# --- documents ---


def map_document(doc: dict[str, Any]) -> dict[str, Any]:
    doc_id = doc.get("document_id", doc.get("id"))
    image = doc.get("image")
    return {
        "id": str(doc_id),
        "sn": serial_number(doc_id),
        "documentName": doc.get("document_name") or "",
        "companyName": doc.get("person_name") or doc.get("company_department") or "",
        "documentType": doc.get("document_type") or "",
        "category": doc.get("category") or "",
        "needsRenewal": doc.get("need_renewal") == "yes",
        "renewalDate": doc.get("renewal_date") or None,
        "file": file_name_from_url(image),
        "fileContent": image or None,
        "email": doc.get("email"),
        "mobile": doc.get("mobile"),
        "tags": doc.get("tags"),
        "date": date_part(doc.get("created_at")) or date.today().isoformat(),
        "status": "Active",
    }


def document_entry_payload(entry: DocumentEntry) -> dict[str, Any]:
    """Add-document form entry -> backend create payload."""
    return {
        "document_name": entry.document_name,
        "document_type": entry.document_type,
        "category": entry.category,
        "person_name": entry.company_name,
        "company_department": entry.company_name if entry.category == "Company" else None,
        "need_renewal": "yes" if entry.needs_renewal else "no",
        "renewal_date": entry.renewal_date if entry.needs_renewal else None,
        "image": entry.file_content or None,
        "email": entry.email,
        "mobile": entry.mobile,
        "tags": entry.tags,
    }


def document_update_payload(body: DocumentUpdate) -> dict[str, Any]:
    """Only the fields the user actually changed."""
    out: dict[str, Any] = {}
    if body.document_name is not None:
        out["document_name"] = body.document_name
    if body.document_type is not None:
        out["document_type"] = body.document_type
    if body.category is not None:
        out["category"] = body.category
    if body.company_name is not None:
        out["person_name"] = body.company_name
        if (body.category or "") == "Company":
            out["company_department"] = body.company_name
    if body.needs_renewal is not None:
        out["need_renewal"] = "yes" if body.needs_renewal else "no"
        if not body.needs_renewal:
            out["renewal_date"] = None
    if body.renewal_date is not None and body.needs_renewal is not False:
        out["renewal_date"] = body.renewal_date
    if body.file_content is not None:
        out["image"] = body.file_content
    if body.email is not None:
        out["email"] = body.email
    if body.mobile is not None:
        out["mobile"] = body.mobile
    if body.tags is not None:
        out["tags"] = body.tags
    return out


# --- subscriptions ---


def map_subscription(sub: dict[str, Any], approval: Optional[str] = None) -> dict[str, Any]:
    sub_id = sub.get("id")
    return {
        "id": str(sub_id),
        "sn": serial_number(sub_id),
        "subscriptionNo": sub.get("subscription_no") or "",
        "requestedDate": date_part(sub.get("timestamp")) or "",
        "companyName": sub.get("company_name") or "",
        "subscriberName": sub.get("subscriber_name") or "",
        "subscriptionName": sub.get("subscription_name") or "",
        "price": sub.get("price") or "",
        "frequency": sub.get("frequency") or "",
        "purpose": sub.get("purpose") or "",
        "startDate": sub.get("start_date") or "",
        "endDate": sub.get("end_date") or "",
        "plannedRenewalDate": sub.get("planned_1") or "",
        "status": derive_subscription_status(sub, approval),
    }


def _approval_order(item: dict[str, Any]) -> tuple[str, int]:
    try:
        seq = int(item.get("id"))
    except (TypeError, ValueError):
        seq = 0
    return str(item.get("requested_on") or ""), seq


def latest_approvals(history: list[dict[str, Any]]) -> dict[str, str]:
    """
    subscription_no -> most recent approval decision. Entries are ordered by
    requested_on, then id; entries with neither keep the order they came in.
    """
    out: dict[str, str] = {}
    for item in sorted(history, key=_approval_order):
        number = item.get("subscription_no")
        if number and item.get("approval"):
            out[number] = item["approval"]
    return out


# --- loans ---


def _yes_no(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return "Yes" if value.strip().lower() in ("yes", "true", "1") else "No"
    return "Yes" if value else "No"


def map_loan(
    loan: dict[str, Any],
    foreclosure: Optional[dict[str, Any]] = None,
    noc: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """
    Flatten a loan plus its foreclosure request and NOC record (matched by
    serial number) into the display shape with the whole workflow chain.
    """
    loan_id = loan.get("id")
    upload = loan.get("upload_document")
    out = {
        "id": str(loan_id),
        "sn": serial_number(loan_id),
        "loanName": loan.get("loan_name") or "",
        "bankName": loan.get("bank_name") or "",
        "amount": loan.get("amount"),
        "emi": loan.get("emi"),
        "startDate": date_part(loan.get("loan_start_date")) or "",
        "endDate": date_part(loan.get("loan_end_date")) or "",
        "providedDocument": loan.get("provided_document_name") or "",
        "file": file_name_from_url(upload),
        "fileContent": upload or None,
        "remarks": loan.get("remarks") or "",
        "foreclosureStatus": loan.get("foreclosure_status"),
        "requestDate": date_part(loan.get("request_date")),
        "requesterName": loan.get("requester_name"),
        "documentStatus": _yes_no(loan.get("document_status")),
        "documentCollectionRemarks": loan.get("document_collection_remarks"),
        "closerRequestDate": date_part(loan.get("closer_request_date")),
        "collectNocStatus": _yes_no(loan.get("collect_noc")),
        "finalSettlementStatus": _yes_no(loan.get("final_settlement_status")),
        "nextDate": date_part(loan.get("next_date")),
        "settlementDate": date_part(loan.get("settlement_date")),
    }
    if foreclosure:
        out["foreclosureStatus"] = foreclosure.get("status") or out["foreclosureStatus"] or "Pending"
        out["requestDate"] = date_part(foreclosure.get("request_date")) or out["requestDate"]
        out["requesterName"] = foreclosure.get("requester_name") or out["requesterName"]
    if noc:
        out["collectNocStatus"] = _yes_no(noc.get("collect_noc"))
        out["closerRequestDate"] = date_part(noc.get("closure_request_date")) or out["closerRequestDate"]
        # A NOC record exists only once the loan documents were collected
        out["documentStatus"] = out["documentStatus"] or "Yes"
    out["loanStatus"] = derive_loan_status(out)
    return out


def map_foreclosure(req: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": str(req.get("id")),
        "serialNo": req.get("serial_no") or "",
        "loanName": req.get("loan_name") or "",
        "bankName": req.get("bank_name") or "",
        "amount": req.get("amount"),
        "emi": req.get("emi"),
        "startDate": date_part(req.get("loan_start_date")) or "",
        "endDate": date_part(req.get("loan_end_date")) or "",
        "requestDate": date_part(req.get("request_date")) or "",
        "requesterName": req.get("requester_name") or "",
        "status": req.get("status") or "Pending",
    }


def map_noc(rec: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": str(rec.get("id")),
        "serialNo": rec.get("serial_no") or "",
        "loanName": rec.get("loan_name") or "",
        "bankName": rec.get("bank_name") or "",
        "startDate": date_part(rec.get("loan_start_date")) or "",
        "endDate": date_part(rec.get("loan_end_date")) or "",
        "closureRequestDate": date_part(rec.get("closure_request_date")) or "",
        "collectNoc": _yes_no(rec.get("collect_noc")),
    }


# --- master / users ---


def map_master(record: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": str(record.get("id")),
        "companyName": record.get("company_name") or "",
        "documentType": record.get("document_type") or "",
        "category": record.get("category") or "",
        "renewalFilter": bool(record.get("renewal_filter")),
    }


def map_user(user: dict[str, Any]) -> dict[str, Any]:
    username = pick(user, "username") or pick(user, "id") or ""
    role = pick(user, "role", "employee")
    return {
        "id": str(pick(user, "id", username)),
        "username": username,
        "role": "admin" if role == "admin" else "employee",
        "department": pick(user, "department"),
        "systemAccess": list(pick(user, "system_access", [])),
        "pageAccess": list(pick(user, "page_access", [])),
    }


# --- payment requests ---


def payment_stage(item: dict[str, Any]) -> str:
    if item.get("actual3"):
        return "Completed"
    if item.get("actual2"):
        return "Tally Entry"
    if item.get("actual1"):
        return "Make Payment"
    return "Approval"


def transform_payment(item: dict[str, Any]) -> dict[str, Any]:
    """Payment request in either key casing -> display shape."""
    try:
        amount = float(item.get("amount") or 0)
    except (TypeError, ValueError):
        amount = 0.0
    out = {
        "id": str(item.get("id") or ""),
        "status": item.get("status") or "Pending",
        "uniqueNo": pick(item, "unique_no", ""),
        "fmsName": pick(item, "fms_name", ""),
        "payTo": pick(item, "pay_to", ""),
        "amount": amount,
        "remarks": item.get("remarks") or "",
        "stageRemarks": pick(item, "stage_remarks", ""),
        "attachment": item.get("attachment") or "",
        "paymentType": pick(item, "payment_type", ""),
        "planned1": item.get("planned1") or "",
        "actual1": item.get("actual1") or "",
        "planned2": item.get("planned2") or "",
        "actual2": item.get("actual2") or "",
        "planned3": item.get("planned3") or "",
        "actual3": item.get("actual3") or "",
        "createdAt": pick(item, "created_at", ""),
    }
    out["stage"] = payment_stage(out)
    return out


# --- local history rows ---


def share_record_to_dict(r: ShareRecord) -> dict[str, Any]:
    return {
        "id": r.id,
        "shareNo": r.share_no,
        "dateTime": r.shared_at,
        "docSerial": r.doc_serial,
        "docName": r.doc_name,
        "docFile": r.doc_file,
        "sharedVia": r.shared_via,
        "recipientName": r.recipient_name,
        "contactInfo": r.contact_info,
    }


def document_renewal_to_dict(r: DocumentRenewalRecord) -> dict[str, Any]:
    return {
        "id": r.id,
        "documentId": r.document_id,
        "sn": r.sn,
        "documentName": r.document_name,
        "documentType": r.document_type,
        "category": r.category,
        "companyName": r.company_name,
        "entryDate": r.entry_date,
        "oldRenewalDate": r.old_renewal_date,
        "oldFile": r.old_file,
        "renewalStatus": r.renewal_status,
        "nextRenewalDate": r.next_renewal_date,
        "newFile": r.new_file,
    }


def subscription_renewal_to_dict(r: SubscriptionRenewalRecord) -> dict[str, Any]:
    return {
        "id": r.id,
        "renewalNo": r.renewal_no,
        "subscriptionId": r.subscription_id,
        "sn": r.sn,
        "companyName": r.company_name,
        "subscriberName": r.subscriber_name,
        "subscriptionName": r.subscription_name,
        "frequency": r.frequency,
        "price": r.price,
        "endDate": r.end_date,
        "newEndDate": r.new_end_date,
        "renewalStatus": r.renewal_status,
    }
