"""Upstream REST backend clients, one per resource group."""
from clients.base import BackendClient, BackendError
from clients.documents import DocumentsClient
from clients.loans import LoansClient
from clients.master import MasterClient
from clients.payments import PaymentsClient
from clients.subscriptions import SubscriptionsClient
from clients.users import UsersClient

__all__ = [
    "BackendClient",
    "BackendError",
    "DocumentsClient",
    "LoansClient",
    "MasterClient",
    "PaymentsClient",
    "SubscriptionsClient",
    "UsersClient",
]
