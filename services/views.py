"""
Filtered and grouped views over display-shaped collections.

Each screen shows a search box over a few text fields, an optional dropdown
filter, and for workflow screens a pending/history split decided by the
record's derived status.
"""
from __future__ import annotations

from collections import Counter
from typing import Any, Callable, Iterable, Optional

from schemas.user import CurrentUser

DOCUMENT_SEARCH_FIELDS = ("documentName", "companyName", "sn")
SUBSCRIPTION_SEARCH_FIELDS = ("subscriptionName", "companyName", "subscriberName", "sn")
LOAN_SEARCH_FIELDS = ("loanName", "bankName", "sn")
SHARE_SEARCH_FIELDS = ("docName", "docSerial", "recipientName", "shareNo")


def matches_search(item: dict[str, Any], term: Optional[str], fields: Iterable[str]) -> bool:
    if not term:
        return True
    needle = term.lower()
    return any(needle in str(item.get(f) or "").lower() for f in fields)


def filter_items(
    items: Iterable[dict[str, Any]],
    search: Optional[str] = None,
    fields: Iterable[str] = (),
    **equals: Optional[str],
) -> list[dict[str, Any]]:
    """Search across `fields`, then keep items whose keys equal each non-empty filter."""
    fields = tuple(fields)
    active = {k: v for k, v in equals.items() if v}
    return [
        item
        for item in items
        if matches_search(item, search, fields) and all(item.get(k) == v for k, v in active.items())
    ]


def distinct_values(items: Iterable[dict[str, Any]], key: str) -> list[str]:
    """Sorted non-empty values for a dropdown filter."""
    return sorted({str(item[key]) for item in items if item.get(key)})


def visible_to(user: CurrentUser, item: dict[str, Any], owner_field: str = "companyName") -> bool:
    """Admins see everything; others only records they own."""
    if user.is_admin:
        return True
    return item.get(owner_field) == user.username


def drop_from_selection(selected: Iterable[str], removed_id: str) -> list[str]:
    return [s for s in selected if s != removed_id]


def split_by(
    items: Iterable[dict[str, Any]], is_pending: Callable[[dict[str, Any]], bool]
) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    pending: list[dict[str, Any]] = []
    history: list[dict[str, Any]] = []
    for item in items:
        (pending if is_pending(item) else history).append(item)
    return pending, history


# --- workflow stages ---


def approval_pending(sub: dict[str, Any]) -> bool:
    return sub.get("status") in (None, "", "Pending")


def foreclosure_pending(loan: dict[str, Any]) -> bool:
    return not loan.get("foreclosureStatus")


def noc_pending(loan: dict[str, Any]) -> bool:
    return loan.get("documentStatus") == "Yes" and not loan.get("collectNocStatus")


def noc_done(loan: dict[str, Any]) -> bool:
    return bool(loan.get("collectNocStatus"))


def group_counts(items: Iterable[dict[str, Any]], key: str, fallback: str) -> list[dict[str, Any]]:
    """[{label, count}] sorted by count descending, then label."""
    counts = Counter((item.get(key) or fallback) for item in items)
    return [
        {"label": label, "count": count}
        for label, count in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    ]
