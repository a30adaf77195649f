from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field

from .base import CamelModel


class UserCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6)


class UserUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6)


class UserResponse(CamelModel):
    user_id: int
    name: Optional[str] = None
    email: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class RecoveryRequest(CamelModel):
    email: EmailStr
