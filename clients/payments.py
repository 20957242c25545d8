from __future__ import annotations

from typing import Any, Optional

from clients.base import BackendClient


class PaymentsClient:
    """
    `/payment-fms` three-stage payment requests. Responses use the
    {success, data, error} envelope.
    """

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def _call(self, method: str, path: str, fallback: str, json: Any = None) -> Any:
        return await self.backend.request(method, path, json=json, fallback=fallback, envelope=True)

    async def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        return await self._call("POST", "/payment-fms/create", "Failed to create payment request", payload)

    async def list_all(self) -> list[dict[str, Any]]:
        return await self._call("GET", "/payment-fms/all", "Failed to fetch payment requests") or []

    async def delete(self, request_id: str) -> None:
        await self._call("DELETE", f"/payment-fms/{request_id}", "Failed to delete payment request")

    # Stage 1: approval
    async def approval_pending(self) -> list[dict[str, Any]]:
        return await self._call("GET", "/payment-fms/approval/pending", "Failed to fetch approval pending") or []

    async def approval_history(self) -> list[dict[str, Any]]:
        return await self._call("GET", "/payment-fms/approval/history", "Failed to fetch approval history") or []

    async def process_approval(self, request_id: str, status: str, stage_remarks: Optional[str] = None) -> dict[str, Any]:
        return await self._call(
            "PATCH",
            f"/payment-fms/approval/{request_id}/process",
            "Failed to process approval",
            {"status": status, "stageRemarks": stage_remarks},
        )

    # Stage 2: make payment
    async def make_payment_pending(self) -> list[dict[str, Any]]:
        return await self._call(
            "GET", "/payment-fms/make-payment/pending", "Failed to fetch make payment pending"
        ) or []

    async def make_payment_history(self) -> list[dict[str, Any]]:
        return await self._call(
            "GET", "/payment-fms/make-payment/history", "Failed to fetch make payment history"
        ) or []

    async def process_make_payment(self, request_id: str, payment_type: str) -> dict[str, Any]:
        return await self._call(
            "PATCH",
            f"/payment-fms/make-payment/{request_id}/process",
            "Failed to process payment",
            {"paymentType": payment_type},
        )

    # Stage 3: tally entry
    async def tally_entry_pending(self) -> list[dict[str, Any]]:
        return await self._call(
            "GET", "/payment-fms/tally-entry/pending", "Failed to fetch tally entry pending"
        ) or []

    async def tally_entry_history(self) -> list[dict[str, Any]]:
        return await self._call(
            "GET", "/payment-fms/tally-entry/history", "Failed to fetch tally entry history"
        ) or []

    async def process_tally_entry(self, request_ids: list[str]) -> list[dict[str, Any]]:
        return await self._call(
            "POST", "/payment-fms/tally-entry/process", "Failed to process tally entries", {"ids": request_ids}
        ) or []
