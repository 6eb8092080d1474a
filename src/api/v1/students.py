# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student API endpoints.

This module provides scoped student reads:
- GET / - List students visible to the caller
- GET /unassigned - Students without a class (school management only)
- GET /{student_id} - Get student details

A teacher sees students of the classes they supervise or teach in. A parent
sees only their own children. A student outside the caller's scope is
reported exactly like a missing one.
"""

import logging

from fastapi import APIRouter, Query

from src.api.dependencies import Access, AnyRole, DbSession, Page, SchoolManager
from src.domains.access import AccessDeniedError, AccessErrorKind, ResourceKind
from src.domains.student.service import StudentService
from src.models.common import PaginatedResponse
from src.models.school import StudentDetail, StudentSummary

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=PaginatedResponse[StudentSummary],
    summary="List students",
)
async def list_students(
    identity: AnyRole,
    access: Access,
    db: DbSession,
    page: Page,
    class_id: str | None = Query(None, description="Only students of this class"),
    search: str | None = Query(None, description="Match on first or last name"),
) -> PaginatedResponse[StudentSummary]:
    scope = access.build_filter(identity, ResourceKind.STUDENT)
    items, total = await StudentService(db).list_students(
        scope,
        class_id=class_id,
        search=search,
        limit=page.limit,
        offset=page.offset,
    )
    return PaginatedResponse(items=items, total=total, limit=page.limit, offset=page.offset)


@router.get(
    "/unassigned",
    response_model=PaginatedResponse[StudentSummary],
    summary="List students without a class",
)
async def list_unassigned_students(
    identity: SchoolManager,
    access: Access,
    db: DbSession,
    page: Page,
) -> PaginatedResponse[StudentSummary]:
    scope = access.build_filter(identity, ResourceKind.STUDENT)
    items, total = await StudentService(db).list_students(
        scope, unassigned=True, limit=page.limit, offset=page.offset
    )
    return PaginatedResponse(items=items, total=total, limit=page.limit, offset=page.offset)


@router.get(
    "/{student_id}",
    response_model=StudentDetail,
    summary="Get student details",
)
async def get_student(
    student_id: str,
    identity: AnyRole,
    access: Access,
    db: DbSession,
) -> StudentDetail:
    """Get one student with every parent link.

    Raises:
        AccessDeniedError: 404 when the student is absent or out of scope.
    """
    (await access.require_access(identity, ResourceKind.STUDENT, student_id)).unwrap()

    student = await StudentService(db).get_student(student_id)
    if student is None:
        raise AccessDeniedError(AccessErrorKind.NOT_FOUND, f"student {student_id} vanished")
    return student
