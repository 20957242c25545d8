from __future__ import annotations

from typing import Any

from clients.base import BackendClient, unwrap


class SubscriptionsClient:
    """
    Subscription lifecycle endpoints: `/subscription`, `/subscription-approval`,
    `/subscription-payment` and `/subscription-renewal`. These return bare JSON
    lists rather than keyed objects.
    """

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def generate_number(self) -> str:
        body = await self.backend.request(
            "GET", "/subscription/generate-number", fallback="Failed to generate subscription number"
        )
        return unwrap(body, "subscriptionNo", "")

    async def create_subscription(self, payload: dict[str, Any]) -> Any:
        return await self.backend.request(
            "POST", "/subscription/create", json=payload, fallback="Failed to create subscription"
        )

    async def list_subscriptions(self) -> list[dict[str, Any]]:
        return await self.backend.request("GET", "/subscription/all", fallback="Failed to fetch subscriptions") or []

    async def pending_approvals(self) -> list[dict[str, Any]]:
        return await self.backend.request(
            "GET", "/subscription-approval/pending", fallback="Failed to fetch pending approvals"
        ) or []

    async def approval_history(self) -> list[dict[str, Any]]:
        return await self.backend.request(
            "GET", "/subscription-approval/history", fallback="Failed to fetch approval history"
        ) or []

    async def submit_approval(self, payload: dict[str, Any]) -> Any:
        return await self.backend.request(
            "POST", "/subscription-approval/submit", json=payload, fallback="Failed to submit approval"
        )

    async def pending_payments(self) -> list[dict[str, Any]]:
        return await self.backend.request(
            "GET", "/subscription-payment/pending", fallback="Failed to fetch pending payments"
        ) or []

    async def payment_history(self) -> list[dict[str, Any]]:
        return await self.backend.request(
            "GET", "/subscription-payment/history", fallback="Failed to fetch payment history"
        ) or []

    async def submit_payment(self, payload: dict[str, Any]) -> Any:
        return await self.backend.request(
            "POST", "/subscription-payment/submit", json=payload, fallback="Failed to submit payment"
        )

    async def pending_renewals(self) -> list[dict[str, Any]]:
        return await self.backend.request(
            "GET", "/subscription-renewal/pending", fallback="Failed to fetch pending renewals"
        ) or []

    async def renewal_history(self) -> list[dict[str, Any]]:
        return await self.backend.request(
            "GET", "/subscription-renewal/history", fallback="Failed to fetch renewal history"
        ) or []

    async def submit_renewal(self, payload: dict[str, Any]) -> Any:
        return await self.backend.request(
            "POST", "/subscription-renewal/submit", json=payload, fallback="Failed to submit renewal"
        )
