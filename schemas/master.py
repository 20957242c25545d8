from __future__ import annotations

from typing import Optional

from schemas.common import CamelModel


class MasterCreate(CamelModel):
    company_name: str
    document_type: str
    category: str
    renewal_filter: bool = False


class MasterUpdate(CamelModel):
    company_name: Optional[str] = None
    document_type: Optional[str] = None
    category: Optional[str] = None
    renewal_filter: Optional[bool] = None
