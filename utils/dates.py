"""Date parsing shared by the mappers and derivations."""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

_ISO_PREFIX = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")
_DMY = re.compile(r"^(\d{2})/(\d{2})/(\d{4})")


def parse_date(value: object) -> Optional[date]:
    """Best-effort parse of the date formats the backend and seed data use."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    m = _ISO_PREFIX.match(text)
    if m:
        try:
            return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        except ValueError:
            return None
    m = _DMY.match(text)
    if m:
        try:
            return date(int(m.group(3)), int(m.group(2)), int(m.group(1)))
        except ValueError:
            return None
    return None


def date_part(value: Optional[str]) -> Optional[str]:
    """'2024-10-10T08:00:00Z' -> '2024-10-10'."""
    if not value:
        return None
    return str(value).split("T")[0]
