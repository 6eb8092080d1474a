# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared response models."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of a scoped list.

    Attributes:
        items: Rows on this page.
        total: Rows matching the caller's scope.
        limit: Page size.
        offset: Rows skipped.
    """

    items: list[T]
    total: int = Field(..., ge=0)
    limit: int
    offset: int


class ErrorResponse(BaseModel):
    detail: str
