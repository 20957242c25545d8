from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field

from schemas.common import CamelModel


class PaymentRequestCreate(CamelModel):
    fms_name: str
    pay_to: str
    amount: float = Field(..., ge=0)
    remarks: Optional[str] = None
    attachment: Optional[str] = None
    unique_no: Optional[str] = None


class ApprovalProcess(CamelModel):
    status: Literal["Approved", "Rejected"]
    stage_remarks: Optional[str] = None


class MakePaymentProcess(CamelModel):
    payment_type: str = Field(..., min_length=1)


class TallyEntryProcess(CamelModel):
    ids: list[str] = Field(..., min_length=1)
