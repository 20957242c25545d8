from __future__ import annotations

from typing import Any

from clients.base import BackendClient, unwrap


class DocumentsClient:
    """`/documents` resource group."""

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def list_documents(self) -> list[dict[str, Any]]:
        body = await self.backend.request("GET", "/documents/", fallback="Failed to fetch documents")
        return unwrap(body, "documents", [])

    async def get_document(self, document_id: int) -> dict[str, Any]:
        body = await self.backend.request("GET", f"/documents/{document_id}", fallback="Failed to fetch document")
        return unwrap(body, "document", {})

    async def create_documents(self, payloads: list[dict[str, Any]]) -> list[dict[str, Any]]:
        body = await self.backend.request(
            "POST", "/documents/create-multiple", json={"documents": payloads}, fallback="Failed to create documents"
        )
        return unwrap(body, "documents", [])

    async def update_document(self, document_id: int, payload: dict[str, Any]) -> dict[str, Any]:
        body = await self.backend.request(
            "PUT", f"/documents/{document_id}", json=payload, fallback="Failed to update document"
        )
        return unwrap(body, "document", {})

    async def delete_document(self, document_id: int) -> None:
        await self.backend.request("DELETE", f"/documents/{document_id}", fallback="Failed to delete document")

    async def list_needing_renewal(self) -> list[dict[str, Any]]:
        body = await self.backend.request("GET", "/documents/renewal", fallback="Failed to fetch renewal documents")
        return unwrap(body, "documents", [])

    async def stats(self) -> dict[str, Any]:
        body = await self.backend.request("GET", "/documents/stats", fallback="Failed to fetch document stats")
        return unwrap(body, "stats", {})
