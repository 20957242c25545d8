from __future__ import annotations

from typing import Optional, Union

from schemas.common import CamelModel

# Amounts arrive as typed by the user ("₹1,20,000") or as numbers
Amount = Union[str, float, int]


class LoanCreate(CamelModel):
    loan_name: str
    bank_name: str
    amount: Amount
    emi: Amount
    start_date: str
    end_date: str
    provided_document: Optional[str] = None
    upload_document: Optional[str] = None
    remarks: Optional[str] = None


class LoanUpdate(CamelModel):
    loan_name: Optional[str] = None
    bank_name: Optional[str] = None
    amount: Optional[Amount] = None
    emi: Optional[Amount] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    provided_document: Optional[str] = None
    upload_document: Optional[str] = None
    remarks: Optional[str] = None


class ForeclosureCreate(CamelModel):
    loan_id: str
    request_date: Optional[str] = None
    requester_name: str = "Admin"


class NocSubmit(CamelModel):
    serial_no: str
    collect_noc: bool = True
