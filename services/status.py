"""
Derived display state: statuses, serial numbers, renewal windows, expiry buckets
and subscription cost normalisation.

Everything here is a pure function of its arguments. Statuses are recomputed
from the backend's raw markers on every fetch and never read back from a cache.
"""
from __future__ import annotations

import calendar
import re
from datetime import date, timedelta
from typing import Any, Literal, Optional

from utils.dates import parse_date

SubscriptionStatus = Literal["Pending", "Approved", "Paid", "Rejected"]
ExpiryBucket = Literal["Active", "Expiring", "Expired"]
LoanStatus = Literal["Active", "Foreclosure", "Closed"]

DEFAULT_RENEWAL_WINDOW_DAYS = 7
DEFAULT_EXPIRY_WINDOW_DAYS = 30

# Divisor that turns one billing period's price into a monthly figure
_MONTHS_PER_PERIOD = {
    "monthly": 1,
    "quarterly": 3,
    "half-yearly": 6,
    "6 months": 6,
    "yearly": 12,
}

_NON_PRICE_CHARS = re.compile(r"[^\d.]")
# Only the leading number counts: '1200.00.' -> 1200.0
_PRICE_PREFIX = re.compile(r"\d+(?:\.\d*)?|\.\d+")
_AMOUNT_NOISE = re.compile(r"[₹,\s]")


def serial_number(record_id: Any, prefix: str = "SN") -> str:
    """Numeric id -> 'SN-007'. Non-numeric ids are used as they are."""
    try:
        return f"{prefix}-{int(record_id):03d}"
    except (TypeError, ValueError):
        return f"{prefix}-{record_id}"


def _is_set(marker: Any) -> bool:
    return marker is not None and marker != "" and marker is not False


def derive_subscription_status(record: dict[str, Any], approval: Optional[str] = None) -> SubscriptionStatus:
    """
    Most advanced marker wins: payment (actual_3) -> Paid, approval decision
    (actual_2) -> Approved or Rejected, nothing -> Pending.
    `approval` is the recorded decision for this subscription, if known.
    """
    if _is_set(record.get("actual_3")):
        return "Paid"
    if _is_set(record.get("actual_2")):
        decision = approval or record.get("approval")
        if isinstance(decision, str) and decision.strip().lower() == "rejected":
            return "Rejected"
        return "Approved"
    return "Pending"


def renewal_planned_date(record: dict[str, Any]) -> Optional[date]:
    """Planned renewal date of a candidate: planned_1, else its end date."""
    return parse_date(record.get("planned_1")) or parse_date(record.get("end_date"))


def is_renewal_due(
    planned: Optional[date],
    today: Optional[date] = None,
    window_days: int = DEFAULT_RENEWAL_WINDOW_DAYS,
) -> bool:
    """Due when planned <= today + window. Already-past dates count as due."""
    if planned is None:
        return False
    today = today or date.today()
    return planned <= today + timedelta(days=window_days)


def document_expiry_bucket(
    renewal_date: Any,
    today: Optional[date] = None,
    window_days: int = DEFAULT_EXPIRY_WINDOW_DAYS,
) -> ExpiryBucket:
    renewal = parse_date(renewal_date)
    if renewal is None:
        return "Active"
    today = today or date.today()
    days = (renewal - today).days
    if days < 0:
        return "Expired"
    if days <= window_days:
        return "Expiring"
    return "Active"


def derive_loan_status(loan: dict[str, Any]) -> LoanStatus:
    """Display-shaped loan -> chart bucket."""
    if loan.get("finalSettlementStatus") == "Yes":
        return "Closed"
    if loan.get("foreclosureStatus") == "Approved":
        return "Foreclosure"
    return "Active"


def parse_price(price: Any) -> float:
    """Free-text currency ('₹12,499', '$20/mo') -> number; unparseable -> 0."""
    if isinstance(price, (int, float)):
        return float(price)
    cleaned = _NON_PRICE_CHARS.sub("", str(price or ""))
    m = _PRICE_PREFIX.match(cleaned)
    return float(m.group()) if m else 0.0


def monthly_cost(price: Any, frequency: Optional[str]) -> float:
    months = _MONTHS_PER_PERIOD.get((frequency or "").strip().lower(), 1)
    return parse_price(price) / months


def clean_amount(value: Any) -> float:
    """Loan amount / EMI as typed by the user -> number."""
    if isinstance(value, (int, float)):
        return float(value)
    cleaned = _AMOUNT_NOISE.sub("", str(value or ""))
    try:
        return float(cleaned)
    except ValueError:
        raise ValueError(f"Invalid amount: {value!r}") from None


def _add_months(d: date, months: int) -> date:
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def extend_end_date(end_date: Any, frequency: Optional[str]) -> Optional[date]:
    """
    Next end date after an approved renewal: one period later.
    Unknown frequencies extend by a year.
    """
    end = parse_date(end_date)
    if end is None:
        return None
    freq = (frequency or "").lower()
    if "half" in freq or "6 month" in freq:
        return _add_months(end, 6)
    if "year" in freq:
        return _add_months(end, 12)
    if "quarter" in freq:
        return _add_months(end, 3)
    if "month" in freq:
        return _add_months(end, 1)
    return _add_months(end, 12)
