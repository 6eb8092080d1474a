# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication request and response models."""

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Email and password login."""

    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Issued bearer credentials.

    Attributes:
        access_token: Short-lived access token.
        refresh_token: Long-lived refresh token.
        token_type: Always "Bearer".
        expires_in: Access token lifetime in seconds.
    """

    model_config = ConfigDict(from_attributes=True)

    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: int


class IdentityResponse(BaseModel):
    """Resolved identity of the caller.

    ``school_id`` is the profile school for staff and is always null for a
    parent. ``school_ids`` lists a parent's schools.
    """

    subject_id: str
    role: str
    school_id: str | None = None
    school_ids: list[str] | None = None
