from __future__ import annotations

from typing import Any

from clients.base import BackendClient, unwrap


class UsersClient:
    """`/auth/login` and `/settings/users`."""

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def login(self, username: str, password: str) -> dict[str, Any]:
        body = await self.backend.request(
            "POST",
            "/auth/login",
            json={"username": username, "password": password},
            fallback="Invalid credentials",
        )
        return unwrap(body, "user", {})

    async def list_users(self) -> list[dict[str, Any]]:
        body = await self.backend.request("GET", "/settings/users", fallback="Failed to fetch users")
        return unwrap(body, "users", [])

    async def create_user(self, payload: dict[str, Any]) -> dict[str, Any]:
        body = await self.backend.request("POST", "/settings/users", json=payload, fallback="Failed to create user")
        return unwrap(body, "user", {})

    async def update_user(self, user_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        body = await self.backend.request(
            "PUT", f"/settings/users/{user_id}", json=payload, fallback="Failed to update user"
        )
        return unwrap(body, "user", {})

    async def delete_user(self, user_id: str) -> None:
        await self.backend.request("DELETE", f"/settings/users/{user_id}", fallback="Failed to delete user")
