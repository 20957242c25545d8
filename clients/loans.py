from __future__ import annotations

from typing import Any

from clients.base import BackendClient, unwrap


class LoansClient:
    """`/loans` resource group: loans, foreclosure requests and NOC collection."""

    def __init__(self, backend: BackendClient):
        self.backend = backend

    # --- loans ---

    async def list_loans(self) -> list[dict[str, Any]]:
        body = await self.backend.request("GET", "/loans", fallback="Failed to fetch loans")
        return unwrap(body, "loans", [])

    async def get_loan(self, loan_id: int) -> dict[str, Any]:
        body = await self.backend.request("GET", f"/loans/{loan_id}", fallback="Failed to fetch loan")
        return unwrap(body, "loan", {})

    async def create_loan(self, payload: dict[str, Any]) -> dict[str, Any]:
        body = await self.backend.request("POST", "/loans", json=payload, fallback="Failed to create loan")
        return unwrap(body, "loan", {})

    async def update_loan(self, loan_id: int, payload: dict[str, Any]) -> dict[str, Any]:
        body = await self.backend.request("PUT", f"/loans/{loan_id}", json=payload, fallback="Failed to update loan")
        return unwrap(body, "loan", {})

    async def delete_loan(self, loan_id: int) -> None:
        await self.backend.request("DELETE", f"/loans/{loan_id}", fallback="Failed to delete loan")

    # --- foreclosure ---

    async def create_foreclosure_request(self, payload: dict[str, Any]) -> dict[str, Any]:
        body = await self.backend.request(
            "POST", "/loans/foreclosure/request", json=payload, fallback="Failed to create foreclosure request"
        )
        return unwrap(body, "request", {})

    async def foreclosure_history(self) -> list[dict[str, Any]]:
        body = await self.backend.request(
            "GET", "/loans/foreclosure/history", fallback="Failed to fetch foreclosure history"
        )
        return unwrap(body, "history", [])

    # --- NOC ---

    async def save_noc(self, payload: dict[str, Any]) -> dict[str, Any]:
        body = await self.backend.request("POST", "/loans/noc", json=payload, fallback="Failed to process NOC")
        return unwrap(body, "noc", {})

    async def all_noc_records(self) -> list[dict[str, Any]]:
        body = await self.backend.request("GET", "/loans/noc/all", fallback="Failed to fetch NOC records")
        return unwrap(body, "records", [])
