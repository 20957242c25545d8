from __future__ import annotations

from typing import Any

from clients.base import BackendClient, unwrap


class MasterClient:
    """`/master` lookup table."""

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def list_records(self) -> list[dict[str, Any]]:
        body = await self.backend.request("GET", "/master", fallback="Failed to fetch master data")
        return unwrap(body, "data", [])

    async def company_names(self) -> list[str]:
        body = await self.backend.request("GET", "/master/company-names", fallback="Failed to fetch company names")
        return unwrap(body, "companyName", [])

    async def document_types(self) -> list[str]:
        body = await self.backend.request(
            "GET", "/master/document-types", fallback="Failed to fetch document types"
        )
        return unwrap(body, "documentTypes", [])

    async def categories(self) -> list[str]:
        body = await self.backend.request("GET", "/master/categories", fallback="Failed to fetch categories")
        return unwrap(body, "categories", [])

    async def create_record(self, payload: dict[str, Any]) -> dict[str, Any]:
        body = await self.backend.request(
            "POST", "/master", json=payload, fallback="Failed to create master record"
        )
        return unwrap(body, "data", {})

    async def update_record(self, record_id: int, payload: dict[str, Any]) -> dict[str, Any]:
        body = await self.backend.request(
            "PUT", f"/master/{record_id}", json=payload, fallback="Failed to update master record"
        )
        return unwrap(body, "data", {})

    async def delete_record(self, record_id: int) -> None:
        await self.backend.request("DELETE", f"/master/{record_id}", fallback="Failed to delete master record")
