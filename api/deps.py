"""
Shared router dependencies: upstream clients, the local store, session tokens
and module/page access checks.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from clients import (
    BackendClient,
    DocumentsClient,
    LoansClient,
    MasterClient,
    PaymentsClient,
    SubscriptionsClient,
    UsersClient,
)
from config import settings
from database import get_db
from schemas.user import CurrentUser
from services.store import DataStore

MSG_AUTH_REQUIRED = "Authentication required"
MSG_TOKEN_EXPIRED = "Token expired"
MSG_TOKEN_INVALID = "Invalid token"
MSG_FORBIDDEN = "You do not have access to this module"
MSG_ADMIN_ONLY = "Admin access required"

KNOWN_MODULES: tuple[str, ...] = (
    "Dashboard",
    "Document",
    "Subscription",
    "Loan",
    "Calendar",
    "Master",
    "Payment",
    "Settings",
)

# Sidebar tree. Page keys double as pageAccess entries and shell title lookups.
NAVIGATION: list[dict[str, Any]] = [
    {"module": "Dashboard", "label": "Dashboard", "path": "/", "pages": []},
    {
        "module": "Document",
        "label": "Document",
        "path": "/document",
        "pages": [
            {"key": "document.all", "label": "All Documents", "path": "/document/all"},
            {"key": "document.renewal", "label": "Document Renewal", "path": "/document/renewal"},
            {"key": "document.shared", "label": "Shared Documents", "path": "/document/shared"},
        ],
    },
    {
        "module": "Subscription",
        "label": "Subscription",
        "path": "/subscription",
        "pages": [
            {"key": "subscription.all", "label": "All Subscriptions", "path": "/subscription/all"},
            {"key": "subscription.approval", "label": "Subscription Approval", "path": "/subscription/approval"},
            {"key": "subscription.payment", "label": "Subscription Payment", "path": "/subscription/payment"},
            {"key": "subscription.renewal", "label": "Subscription Renewal", "path": "/subscription/renewal"},
        ],
    },
    {
        "module": "Loan",
        "label": "Loan",
        "path": "/loan",
        "pages": [
            {"key": "loan.all", "label": "All Loans", "path": "/loan/all"},
            {"key": "loan.foreclosure", "label": "Loan Foreclosure", "path": "/loan/foreclosure"},
            {"key": "loan.noc", "label": "Collect NOC", "path": "/loan/noc"},
        ],
    },
    {
        "module": "Payment",
        "label": "Payment",
        "path": "/payment",
        "pages": [
            {"key": "payment.request-form", "label": "Payment Request", "path": "/payment/request-form"},
            {"key": "payment.approval", "label": "Payment Approval", "path": "/payment/approval"},
            {"key": "payment.make-payment", "label": "Make Payment", "path": "/payment/make-payment"},
            {"key": "payment.tally-entry", "label": "Tally Entry", "path": "/payment/tally-entry"},
        ],
    },
    {"module": "Master", "label": "Master", "path": "/master", "pages": []},
    {"module": "Settings", "label": "Settings", "path": "/settings", "pages": []},
]

KNOWN_PAGES: tuple[str, ...] = tuple(p["key"] for entry in NAVIGATION for p in entry["pages"])

_bearer = HTTPBearer(auto_error=False)


# --- upstream / store ---


def get_backend(request: Request) -> BackendClient:
    return request.app.state.backend


def get_documents_client(backend: BackendClient = Depends(get_backend)) -> DocumentsClient:
    return DocumentsClient(backend)


def get_subscriptions_client(backend: BackendClient = Depends(get_backend)) -> SubscriptionsClient:
    return SubscriptionsClient(backend)


def get_loans_client(backend: BackendClient = Depends(get_backend)) -> LoansClient:
    return LoansClient(backend)


def get_master_client(backend: BackendClient = Depends(get_backend)) -> MasterClient:
    return MasterClient(backend)


def get_users_client(backend: BackendClient = Depends(get_backend)) -> UsersClient:
    return UsersClient(backend)


def get_payments_client(backend: BackendClient = Depends(get_backend)) -> PaymentsClient:
    return PaymentsClient(backend)


def get_store(db: AsyncSession = Depends(get_db)) -> DataStore:
    return DataStore(db)


# --- session tokens ---


def create_token(user: CurrentUser) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user.id,
        "username": user.username,
        "role": user.role,
        "department": user.department,
        "systemAccess": user.system_access,
        "pageAccess": user.page_access,
        "iat": now,
        "exp": now + timedelta(hours=settings.jwt_expiry_hours),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> CurrentUser:
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail=MSG_TOKEN_EXPIRED)
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail=MSG_TOKEN_INVALID)
    return CurrentUser(
        id=payload["sub"],
        username=payload.get("username") or payload["sub"],
        role=payload.get("role") or "employee",
        department=payload.get("department"),
        system_access=payload.get("systemAccess") or [],
        page_access=payload.get("pageAccess") or [],
    )


def _anonymous_admin() -> CurrentUser:
    return CurrentUser(
        id="admin",
        username="admin",
        role="admin",
        system_access=list(KNOWN_MODULES),
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> CurrentUser:
    if not settings.auth_enabled:
        return _anonymous_admin()
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail=MSG_AUTH_REQUIRED)
    return decode_token(credentials.credentials)


# --- access checks ---


def has_module(user: CurrentUser, module: str) -> bool:
    return user.is_admin or module in user.system_access or module in user.page_access


def has_page(user: CurrentUser, page_key: str) -> bool:
    """No page list means every page of an accessible module."""
    if user.is_admin or not user.page_access:
        return True
    return page_key in user.page_access


def require_access(module: str):
    """Dependency factory: the caller must have `module` in their access lists."""

    async def _check(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not has_module(user, module):
            raise HTTPException(status_code=403, detail=MSG_FORBIDDEN)
        return user

    return _check


async def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail=MSG_ADMIN_ONLY)
    return user


def navigation_for(user: CurrentUser) -> list[dict[str, Any]]:
    out: list[dict[str, Any]] = []
    for entry in NAVIGATION:
        if not has_module(user, entry["module"]):
            continue
        pages = [p for p in entry["pages"] if has_page(user, p["key"])]
        out.append({**entry, "pages": pages})
    return out


def page_title(page_key: Optional[str]) -> Optional[str]:
    if not page_key:
        return None
    for entry in NAVIGATION:
        if entry["module"].lower() == page_key.lower():
            return entry["label"]
        for p in entry["pages"]:
            if p["key"] == page_key:
                return p["label"]
    return None
