from __future__ import annotations

from typing import Literal, Optional

from schemas.common import CamelModel


class SubscriptionCreate(CamelModel):
    company_name: str
    subscriber_name: str
    subscription_name: str
    price: str
    frequency: str
    purpose: str = ""
    timestamp: Optional[str] = None


class ApprovalSubmit(CamelModel):
    subscription_no: str
    approval: Literal["Approved", "Rejected"]
    note: str = ""
    approved_by: str = ""
    requested_on: Optional[str] = None


class PaymentSubmit(CamelModel):
    subscription_no: str
    payment_method: str
    transaction_id: str = ""
    price: str = ""
    start_date: str = ""
    end_date: str = ""
    insurance_document: Optional[str] = None
    planned_1: Optional[str] = None


class RenewalSubmit(CamelModel):
    subscription_no: str
    renewal_status: Literal["Approved", "Rejected"]
    approved_by: str = ""
    price: Optional[str] = None
