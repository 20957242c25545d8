from fastapi import APIRouter, Depends

from api.deps import (
    get_documents_client,
    get_loans_client,
    get_master_client,
    get_store,
    get_subscriptions_client,
    require_access,
)
from clients import DocumentsClient, LoansClient, MasterClient, SubscriptionsClient
from schemas.user import CurrentUser
from services.dashboard import build_dashboard
from services.store import DataStore

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=dict)
async def get_dashboard(
    _: CurrentUser = Depends(require_access("Dashboard")),
    documents: DocumentsClient = Depends(get_documents_client),
    subscriptions: SubscriptionsClient = Depends(get_subscriptions_client),
    loans: LoansClient = Depends(get_loans_client),
    master: MasterClient = Depends(get_master_client),
    store: DataStore = Depends(get_store),
):
    """Totals, chart data and card breakdowns; failed collections fall back to the last cached copy."""
    return await build_dashboard(documents, subscriptions, loans, master, store)
