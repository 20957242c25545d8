from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from schemas.common import CamelModel

Role = Literal["admin", "employee"]


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class CurrentUser(CamelModel):
    """Identity carried in the session token."""

    id: str
    username: str
    role: Role = "employee"
    department: Optional[str] = None
    system_access: list[str] = Field(default_factory=list)
    page_access: list[str] = Field(default_factory=list)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class UserCreate(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    role: Role = "employee"
    department: Optional[str] = None
    system_access: list[str] = Field(default_factory=lambda: ["Dashboard"])
    page_access: list[str] = Field(default_factory=list)


class UserUpdate(CamelModel):
    password: Optional[str] = None
    role: Optional[Role] = None
    department: Optional[str] = None
    system_access: Optional[list[str]] = None
    page_access: Optional[list[str]] = None
