# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class API endpoints.

This module provides scoped class reads:
- GET / - List classes visible to the caller
- GET /{class_id} - Get class details

Every role may call these endpoints; the rows returned depend on the role.
A class outside the caller's scope is reported exactly like a missing one.
"""

import logging

from fastapi import APIRouter, Query

from src.api.dependencies import Access, AnyRole, DbSession, Page
from src.domains.access import AccessDeniedError, AccessErrorKind, ResourceKind
from src.domains.class_.service import ClassService
from src.models.common import PaginatedResponse
from src.models.school import ClassDetail, ClassSummary

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=PaginatedResponse[ClassSummary],
    summary="List classes",
)
async def list_classes(
    identity: AnyRole,
    access: Access,
    db: DbSession,
    page: Page,
    search: str | None = Query(None, description="Match on class name"),
) -> PaginatedResponse[ClassSummary]:
    scope = access.build_filter(identity, ResourceKind.CLASS)
    items, total = await ClassService(db).list_classes(
        scope, search=search, limit=page.limit, offset=page.offset
    )
    return PaginatedResponse(items=items, total=total, limit=page.limit, offset=page.offset)


@router.get(
    "/{class_id}",
    response_model=ClassDetail,
    summary="Get class details",
)
async def get_class(
    class_id: str,
    identity: AnyRole,
    access: Access,
    db: DbSession,
) -> ClassDetail:
    """Get one class with its lessons.

    Raises:
        AccessDeniedError: 404 when the class is absent or out of scope.
    """
    (await access.require_access(identity, ResourceKind.CLASS, class_id)).unwrap()

    class_ = await ClassService(db).get_class(class_id)
    if class_ is None:
        raise AccessDeniedError(AccessErrorKind.NOT_FOUND, f"class {class_id} vanished")
    return class_
