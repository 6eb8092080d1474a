# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Teacher API endpoints.

- GET /classes - Classes the teacher supervises or teaches a lesson in
- GET /students - Students of those classes
- GET /subjects - Subjects the teacher is assigned to

Only teachers can call these endpoints.
"""

import logging

from fastapi import APIRouter, Query

from src.api.dependencies import Access, DbSession, Page, TeacherIdentity
from src.domains.access import ResourceKind
from src.domains.class_.service import ClassService
from src.domains.student.service import StudentService
from src.domains.teacher.service import TeacherService
from src.models.common import PaginatedResponse
from src.models.school import ClassSummary, StudentSummary, SubjectSummary

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/classes",
    response_model=PaginatedResponse[ClassSummary],
    summary="List my classes",
)
async def list_teacher_classes(
    identity: TeacherIdentity,
    access: Access,
    db: DbSession,
    page: Page,
) -> PaginatedResponse[ClassSummary]:
    """Classes supervised by the teacher or having a lesson taught by them."""
    scope = access.build_filter(identity, ResourceKind.CLASS)
    items, total = await ClassService(db).list_classes(
        scope, limit=page.limit, offset=page.offset
    )
    return PaginatedResponse(items=items, total=total, limit=page.limit, offset=page.offset)


@router.get(
    "/students",
    response_model=PaginatedResponse[StudentSummary],
    summary="List my students",
)
async def list_teacher_students(
    identity: TeacherIdentity,
    access: Access,
    db: DbSession,
    page: Page,
    class_id: str | None = Query(None, description="Only students of this class"),
) -> PaginatedResponse[StudentSummary]:
    """Students in any class the teacher supervises or teaches in."""
    scope = access.build_filter(identity, ResourceKind.STUDENT)
    items, total = await StudentService(db).list_students(
        scope, class_id=class_id, limit=page.limit, offset=page.offset
    )
    return PaginatedResponse(items=items, total=total, limit=page.limit, offset=page.offset)


@router.get(
    "/subjects",
    response_model=list[SubjectSummary],
    summary="List my subjects",
)
async def list_teacher_subjects(
    identity: TeacherIdentity,
    access: Access,
    db: DbSession,
) -> list[SubjectSummary]:
    scope = access.build_filter(identity, ResourceKind.SUBJECT)
    return await TeacherService(db).list_subjects(identity.subject_id, scope)
