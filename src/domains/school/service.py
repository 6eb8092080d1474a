# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School service for scoped school reads.

This module provides the SchoolService that handles:
- Listing the schools inside a caller's scope
- Headline counts for one school (principal overview)

Example:
    >>> school_service = SchoolService(db_session)
    >>> schools = await school_service.list_schools(SchoolIn(frozenset({"s1", "s2"})))
    >>> overview = await school_service.get_overview("s1")
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.access.predicates import Predicate, ResourceKind
from src.infrastructure.database.models import School, SchoolClass, Student, Subject, Teacher
from src.infrastructure.database.scoping import apply_scope
from src.models.school import SchoolOverview, SchoolSummary

logger = logging.getLogger(__name__)


class SchoolServiceError(Exception):
    """Base exception for school service errors."""

    pass


class SchoolNotFoundError(SchoolServiceError):
    """Raised when school is not found."""

    pass


class SchoolService:
    """Service for reading schools.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_schools(self, scope: Predicate) -> list[SchoolSummary]:
        """List schools inside the caller's scope, ordered by name."""
        query = apply_scope(select(School), ResourceKind.SCHOOL, scope).order_by(School.name)
        result = await self.db.execute(query)
        return [SchoolSummary.model_validate(s) for s in result.scalars().all()]

    async def get_overview(self, school_id: str) -> SchoolOverview:
        """Count students, classes, teachers and subjects of one school.

        Raises:
            SchoolNotFoundError: If the school does not exist.
        """
        result = await self.db.execute(select(School).where(School.id == school_id))
        school = result.scalar_one_or_none()
        if school is None:
            raise SchoolNotFoundError(f"School {school_id} not found")

        async def count(model, *conditions) -> int:
            stmt = select(func.count()).select_from(model).where(
                model.school_id == school_id, *conditions
            )
            return (await self.db.execute(stmt)).scalar() or 0

        return SchoolOverview(
            school=SchoolSummary.model_validate(school),
            student_count=await count(Student),
            class_count=await count(SchoolClass),
            teacher_count=await count(Teacher),
            subject_count=await count(Subject),
            unassigned_student_count=await count(Student, Student.class_id.is_(None)),
        )
