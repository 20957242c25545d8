"""
HTTP access to the upstream REST backend.

Every resource client goes through BackendClient.request so that failures are
logged once and surface as a BackendError carrying the backend's own message.
No retries: a failed call is reported and the caller decides what to show.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from config import settings

logger = logging.getLogger("docmgr.backend")

# Keys the backend uses for error messages, most specific first
_ERROR_KEYS = ("details", "error", "message", "detail")


class BackendError(Exception):
    """Upstream call failed; `detail` is what the user gets to see."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


def _error_detail(response: httpx.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        for key in _ERROR_KEYS:
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return fallback


class BackendClient:
    """
    Thin async wrapper around httpx.AsyncClient bound to the backend base URL.

    Usage:
        backend = BackendClient()
        data = await backend.request("GET", "/documents/", fallback="Failed to fetch documents")
        await backend.aclose()
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.backend_api_url).rstrip("/")
        self.api_key = settings.backend_api_key if api_key is None else api_key
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._get_headers(),
            timeout=timeout if timeout is not None else settings.backend_timeout_seconds,
            transport=transport,
        )
        logger.info("backend_client_init base_url=%s", self.base_url)

    def _get_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
        fallback: str = "Request to backend failed",
        envelope: bool = False,
    ) -> Any:
        """
        Send one request and return the decoded JSON body (None for empty bodies).

        With envelope=True the body is expected as {success, data, error}; a
        false `success` raises and `data` is returned.
        """
        try:
            response = await self._client.request(method, path, json=json, params=params)
        except httpx.HTTPError as e:
            logger.error("backend_call status=transport_error method=%s path=%s error=%r", method, path, e)
            raise BackendError(502, fallback) from e

        if response.status_code >= 400:
            detail = _error_detail(response, fallback)
            logger.error(
                "backend_call status=%s method=%s path=%s detail=%s",
                response.status_code, method, path, detail,
            )
            raise BackendError(response.status_code, detail)

        if not response.content:
            return None
        try:
            body = response.json()
        except ValueError as e:
            logger.error("backend_call status=bad_json method=%s path=%s", method, path)
            raise BackendError(502, fallback) from e

        if envelope:
            if not isinstance(body, dict) or not body.get("success"):
                detail = (body.get("error") if isinstance(body, dict) else None) or fallback
                logger.error("backend_call status=unsuccessful method=%s path=%s detail=%s", method, path, detail)
                raise BackendError(400, detail)
            return body.get("data")
        return body

    async def aclose(self) -> None:
        await self._client.aclose()


def unwrap(body: Any, key: str, default: Any = None) -> Any:
    """Pull `key` out of a {key: ...} response body."""
    if isinstance(body, dict):
        value = body.get(key)
        return default if value is None else value
    return default
