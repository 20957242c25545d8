import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import get_documents_client, get_store, require_access
from clients import DocumentsClient
from schemas.document import DocumentCreate, DocumentEntry, DocumentRenew, DocumentShare, DocumentUpdate
from schemas.user import CurrentUser
from services.loaders import load_documents
from services.mappers import (
    document_entry_payload,
    document_renewal_to_dict,
    document_update_payload,
    map_document,
    share_record_to_dict,
)
from services.store import DOCUMENTS, DataStore
from services.views import (
    DOCUMENT_SEARCH_FIELDS,
    SHARE_SEARCH_FIELDS,
    distinct_values,
    drop_from_selection,
    filter_items,
    visible_to,
)

router = APIRouter(prefix="/api/documents", tags=["documents"])

logger = logging.getLogger("docmgr.documents")

MAX_ENTRIES = 10

MSG_TOO_MANY = f"You can add maximum {MAX_ENTRIES} documents at a time."
MSG_REQUIRED_FIELDS = "Please fill all required fields."
MSG_RENEWAL_DATE = "Please select a renewal date."
MSG_NEXT_RENEWAL_DATE = "Please select Next Renewal Date"
MSG_DOCUMENT_NOT_FOUND = "Document not found"
MSG_SHARE_EMAIL = "Recipient name and email are required"
MSG_SHARE_WHATSAPP = "WhatsApp number is required"

DocumentUser = Depends(require_access("Document"))


def _validate_entry(index: int, entry: DocumentEntry) -> None:
    if not (entry.document_name.strip() and entry.document_type.strip()
            and entry.category.strip() and entry.company_name.strip()):
        raise HTTPException(status_code=400, detail=f"Entry {index + 1}: {MSG_REQUIRED_FIELDS}")
    if entry.needs_renewal and not entry.renewal_date:
        raise HTTPException(status_code=400, detail=f"Entry {index + 1}: {MSG_RENEWAL_DATE}")


@router.get("", response_model=dict)
async def list_documents(
    search: Optional[str] = None,
    category: Optional[str] = None,
    _: CurrentUser = DocumentUser,
    client: DocumentsClient = Depends(get_documents_client),
    store: DataStore = Depends(get_store),
):
    documents = await load_documents(client)
    await store.replace_collection(DOCUMENTS, documents)
    items = filter_items(documents, search, DOCUMENT_SEARCH_FIELDS, category=category)
    return {"items": items, "categories": distinct_values(documents, "category"), "total": len(documents)}


@router.get("/stats", response_model=dict)
async def document_stats(_: CurrentUser = DocumentUser, client: DocumentsClient = Depends(get_documents_client)):
    return await client.stats()


@router.get("/renewal", response_model=dict)
async def pending_renewals(
    search: Optional[str] = None,
    user: CurrentUser = DocumentUser,
    client: DocumentsClient = Depends(get_documents_client),
):
    """Documents due for renewal; non-admins only see documents they own."""
    documents = [map_document(d) for d in await client.list_needing_renewal()]
    items = [d for d in filter_items(documents, search, DOCUMENT_SEARCH_FIELDS) if visible_to(user, d)]
    return {"items": items, "total": len(items)}


@router.get("/renewal/history", response_model=dict)
async def renewal_history(
    search: Optional[str] = None,
    user: CurrentUser = DocumentUser,
    store: DataStore = Depends(get_store),
):
    records = [document_renewal_to_dict(r) for r in await store.list_document_renewals()]
    items = [r for r in filter_items(records, search, DOCUMENT_SEARCH_FIELDS) if visible_to(user, r)]
    return {"items": items, "total": len(items)}


@router.get("/shared", response_model=dict)
async def share_history(
    search: Optional[str] = None,
    _: CurrentUser = DocumentUser,
    store: DataStore = Depends(get_store),
):
    records = [share_record_to_dict(r) for r in await store.list_share_history()]
    items = filter_items(records, search, SHARE_SEARCH_FIELDS)
    return {"items": items, "total": len(items)}


@router.post("/share", response_model=dict, status_code=201)
async def share_documents(
    body: DocumentShare,
    _: CurrentUser = DocumentUser,
    client: DocumentsClient = Depends(get_documents_client),
    store: DataStore = Depends(get_store),
):
    """
    Record a share of one or more documents. Sharing via "both" writes one
    Email record and one WhatsApp record per document.
    """
    by_email = body.via in ("email", "both")
    by_whatsapp = body.via in ("whatsapp", "both")
    if by_email and not (body.recipient_name and body.email):
        raise HTTPException(status_code=400, detail=MSG_SHARE_EMAIL)
    if by_whatsapp and not body.whatsapp:
        raise HTTPException(status_code=400, detail=MSG_SHARE_WHATSAPP)

    known = {d["id"]: d for d in (map_document(x) for x in await client.list_documents())}
    records = []
    for doc_id in body.document_ids:
        doc = known.get(doc_id, {})
        base = {
            "docSerial": doc.get("sn"),
            "docName": doc.get("documentName") or doc_id,
            "docFile": doc.get("file"),
            "recipientName": body.recipient_name,
        }
        if by_email:
            records.append({**base, "sharedVia": "Email", "contactInfo": body.email})
        if by_whatsapp:
            records.append({**base, "sharedVia": "WhatsApp", "contactInfo": body.whatsapp})
    rows = await store.add_share_records(records)
    logger.info("documents_shared count=%s via=%s", len(rows), body.via)
    return {"items": [share_record_to_dict(r) for r in rows]}


@router.post("", response_model=dict, status_code=201)
async def create_documents(
    body: DocumentCreate,
    _: CurrentUser = DocumentUser,
    client: DocumentsClient = Depends(get_documents_client),
    store: DataStore = Depends(get_store),
):
    if len(body.entries) > MAX_ENTRIES:
        raise HTTPException(status_code=400, detail=MSG_TOO_MANY)
    for i, entry in enumerate(body.entries):
        _validate_entry(i, entry)

    await store.add_master_items((e.company_name, e.document_type, e.category) for e in body.entries)
    created = await client.create_documents([document_entry_payload(e) for e in body.entries])
    logger.info("documents_created count=%s", len(created))
    return {"items": [map_document(d) for d in created]}


@router.get("/{document_id}", response_model=dict)
async def get_document(
    document_id: int,
    _: CurrentUser = DocumentUser,
    client: DocumentsClient = Depends(get_documents_client),
):
    doc = await client.get_document(document_id)
    if not doc:
        raise HTTPException(status_code=404, detail=MSG_DOCUMENT_NOT_FOUND)
    return map_document(doc)


@router.put("/{document_id}", response_model=dict)
async def update_document(
    document_id: int,
    body: DocumentUpdate,
    _: CurrentUser = DocumentUser,
    client: DocumentsClient = Depends(get_documents_client),
):
    if body.needs_renewal and not body.renewal_date:
        raise HTTPException(status_code=400, detail=MSG_RENEWAL_DATE)
    updated = await client.update_document(document_id, document_update_payload(body))
    return map_document(updated or {"document_id": document_id})


@router.delete("/{document_id}", response_model=dict)
async def delete_document(
    document_id: int,
    selected: list[str] = Query([]),
    _: CurrentUser = DocumentUser,
    client: DocumentsClient = Depends(get_documents_client),
):
    await client.delete_document(document_id)
    logger.info("document_deleted id=%s", document_id)
    return {"deleted": str(document_id), "selected": drop_from_selection(selected, str(document_id))}


@router.post("/{document_id}/renew", response_model=dict)
async def renew_document(
    document_id: int,
    body: DocumentRenew,
    _: CurrentUser = DocumentUser,
    client: DocumentsClient = Depends(get_documents_client),
    store: DataStore = Depends(get_store),
):
    """
    Renew a document: keep it on the renewal track with a new date (and
    optionally a new file), or take it off the track. Either way a local
    history record snapshots the document as it was.
    """
    if body.renew_again and not body.next_renewal_date:
        raise HTTPException(status_code=400, detail=MSG_NEXT_RENEWAL_DATE)
    raw = await client.get_document(document_id)
    if not raw:
        raise HTTPException(status_code=404, detail=MSG_DOCUMENT_NOT_FOUND)
    document = map_document(raw)

    record = await store.add_document_renewal(document, body.renew_again, body.next_renewal_date, body.new_file)
    if body.renew_again:
        updates = {"renewal_date": body.next_renewal_date}
        if body.new_file_content:
            updates["image"] = body.new_file_content
    else:
        updates = {"need_renewal": "no", "renewal_date": None}
    await client.update_document(document_id, updates)
    logger.info("document_renewed id=%s renew_again=%s", document_id, body.renew_again)
    return document_renewal_to_dict(record)
