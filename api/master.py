import asyncio
import logging

from fastapi import APIRouter, Depends

from api.deps import get_master_client, get_store, require_access
from clients import MasterClient
from schemas.master import MasterCreate, MasterUpdate
from schemas.user import CurrentUser
from services.loaders import load_master
from services.mappers import map_master
from services.store import MASTER, DataStore, master_key

router = APIRouter(prefix="/api/master", tags=["master"])

logger = logging.getLogger("docmgr.master")

MasterUser = Depends(require_access("Master"))


def _merge_sorted(*groups) -> list[str]:
    seen: dict[str, str] = {}
    for group in groups:
        for value in group:
            if value and value.strip().lower() not in seen:
                seen[value.strip().lower()] = value.strip()
    return sorted(seen.values(), key=str.lower)


@router.get("", response_model=dict)
async def list_master(
    _: CurrentUser = MasterUser,
    client: MasterClient = Depends(get_master_client),
    store: DataStore = Depends(get_store),
):
    """Backend master records plus locally learned triples the backend does not have yet."""
    records = await load_master(client)
    await store.replace_collection(MASTER, records)
    known = {master_key(r["companyName"], r["documentType"], r["category"]) for r in records}
    local = [
        {
            "id": m.id,
            "companyName": m.company_name,
            "documentType": m.document_type,
            "category": m.category,
            "renewalFilter": False,
            "source": "local",
        }
        for m in await store.list_master_items()
        if m.lookup_key not in known
    ]
    items = [{**r, "source": "backend"} for r in records] + local
    return {"items": items, "total": len(items)}


@router.get("/lookups", response_model=dict)
async def lookups(
    _: CurrentUser = MasterUser,
    client: MasterClient = Depends(get_master_client),
    store: DataStore = Depends(get_store),
):
    """Autocomplete values for the add-document form."""
    companies, types, categories = await asyncio.gather(
        client.company_names(), client.document_types(), client.categories()
    )
    local = await store.list_master_items()
    return {
        "companyNames": _merge_sorted(companies, (m.company_name for m in local)),
        "documentTypes": _merge_sorted(types, (m.document_type for m in local)),
        "categories": _merge_sorted(categories, (m.category for m in local)),
    }


@router.post("", response_model=dict, status_code=201)
async def create_master(body: MasterCreate, _: CurrentUser = MasterUser, client: MasterClient = Depends(get_master_client)):
    created = await client.create_record(body.model_dump())
    logger.info("master_created id=%s", created.get("id"))
    return map_master(created)


@router.put("/{record_id}", response_model=dict)
async def update_master(
    record_id: int,
    body: MasterUpdate,
    _: CurrentUser = MasterUser,
    client: MasterClient = Depends(get_master_client),
):
    updated = await client.update_record(record_id, body.model_dump(exclude_none=True))
    return map_master(updated or {"id": record_id})


@router.delete("/{record_id}", status_code=204)
async def delete_master(record_id: int, _: CurrentUser = MasterUser, client: MasterClient = Depends(get_master_client)):
    await client.delete_record(record_id)
    logger.info("master_deleted id=%s", record_id)
