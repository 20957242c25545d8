from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field

from schemas.common import CamelModel


class DocumentEntry(CamelModel):
    document_name: str = ""
    document_type: str = ""
    category: str = ""
    # Person, director or company the document belongs to
    company_name: str = ""
    needs_renewal: bool = False
    renewal_date: Optional[str] = None
    file_content: Optional[str] = Field(None, description="Data URL or pre-uploaded S3 URL")
    email: Optional[str] = None
    mobile: Optional[str] = None
    tags: Optional[str] = None


class DocumentCreate(CamelModel):
    entries: list[DocumentEntry] = Field(..., min_length=1)


class DocumentUpdate(CamelModel):
    document_name: Optional[str] = None
    document_type: Optional[str] = None
    category: Optional[str] = None
    company_name: Optional[str] = None
    needs_renewal: Optional[bool] = None
    renewal_date: Optional[str] = None
    file_content: Optional[str] = None
    email: Optional[str] = None
    mobile: Optional[str] = None
    tags: Optional[str] = None


class DocumentRenew(CamelModel):
    renew_again: bool = True
    next_renewal_date: Optional[str] = None
    new_file: Optional[str] = None
    new_file_content: Optional[str] = None


class DocumentShare(CamelModel):
    document_ids: list[str] = Field(..., min_length=1)
    via: Literal["email", "whatsapp", "both"]
    recipient_name: Optional[str] = None
    email: Optional[str] = None
    whatsapp: Optional[str] = None
