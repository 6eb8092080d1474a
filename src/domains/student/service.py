# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student service for scoped student reads.

The same listing serves every role: a school admin's scope is the whole
school, a teacher's scope is the students of the teacher's classes and a
parent's scope is the parent's own children.
"""

import logging

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.domains.access.predicates import Predicate, ResourceKind
from src.infrastructure.database.models import Student
from src.infrastructure.database.scoping import apply_scope
from src.models.school import ParentLinkSummary, StudentDetail, StudentSummary

logger = logging.getLogger(__name__)


class StudentService:
    """Service for reading students.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_students(
        self,
        scope: Predicate,
        class_id: str | None = None,
        unassigned: bool = False,
        search: str | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[StudentSummary], int]:
        """List students inside the caller's scope.

        Args:
            scope: Row scope for ``ResourceKind.STUDENT``.
            class_id: Only students of this class.
            unassigned: Only students without a class.
            search: Case-insensitive match on first or last name.
            limit: Maximum results.
            offset: Pagination offset.

        Returns:
            Tuple of (list of students, total count).
        """
        query = apply_scope(select(Student), ResourceKind.STUDENT, scope)

        if unassigned:
            query = query.where(Student.class_id.is_(None))
        elif class_id:
            query = query.where(Student.class_id == class_id)

        if search:
            pattern = f"%{search}%"
            query = query.where(
                or_(Student.first_name.ilike(pattern), Student.last_name.ilike(pattern))
            )

        count_result = await self.db.execute(
            select(func.count()).select_from(query.subquery())
        )
        total = count_result.scalar() or 0

        result = await self.db.execute(
            query.order_by(Student.last_name, Student.first_name).limit(limit).offset(offset)
        )
        items = [StudentSummary.model_validate(s) for s in result.scalars().all()]
        return items, total

    async def get_student(self, student_id: str) -> StudentDetail | None:
        """Get one student with every parent link. None if it does not exist."""
        result = await self.db.execute(
            select(Student)
            .options(selectinload(Student.parent_links))
            .where(Student.id == student_id)
        )
        student = result.scalar_one_or_none()
        if student is None:
            return None

        return StudentDetail(
            **StudentSummary.model_validate(student).model_dump(),
            primary_parent_id=student.primary_parent_id,
            parents=[ParentLinkSummary.model_validate(link) for link in student.parent_links],
        )
