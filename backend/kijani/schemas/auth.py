"""
Pydantic v2 schemas for registration and login.

Required strings use min_length=1 so an empty value is rejected the
same way as a missing one (400 "Missing fields: ...").
"""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Payload accepted by POST /api/auth/register."""

    name: str = Field(..., min_length=1, examples=["Amina"])
    email: str = Field(..., min_length=1, examples=["amina@example.com"])
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    """Payload accepted by POST /api/auth/login."""

    email: str = Field(..., min_length=1, examples=["amina@example.com"])
    password: str = Field(..., min_length=1)


class UserOut(BaseModel):
    """Public view of a user. The password hash is never part of it."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str


class TokenOut(BaseModel):
    token: str
