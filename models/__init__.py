from models.cache import CachedCollection
from models.history import DocumentRenewalRecord, HistoryCounter, ShareRecord, SubscriptionRenewalRecord
from models.master import MasterLookup

__all__ = [
    "CachedCollection",
    "DocumentRenewalRecord",
    "HistoryCounter",
    "MasterLookup",
    "ShareRecord",
    "SubscriptionRenewalRecord",
]
