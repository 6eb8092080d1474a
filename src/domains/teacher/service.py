# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Teacher service for teacher-facing reads.

Classes and students of a teacher go through the class and student services
with the teacher's scope. This service adds what is specific to a teacher:
the subjects they are assigned to teach.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.access.predicates import Predicate, ResourceKind
from src.infrastructure.database.models import Subject, subject_teachers
from src.infrastructure.database.scoping import apply_scope
from src.models.school import SubjectSummary

logger = logging.getLogger(__name__)


class TeacherService:
    """Service for teacher-specific reads.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_subjects(self, teacher_id: str, scope: Predicate) -> list[SubjectSummary]:
        """List subjects the teacher is assigned to, inside the caller's scope.

        Args:
            teacher_id: Teacher (user) id.
            scope: Row scope for ``ResourceKind.SUBJECT``.

        Returns:
            Subjects ordered by name.
        """
        query = (
            select(Subject)
            .join(subject_teachers, subject_teachers.c.subject_id == Subject.id)
            .where(subject_teachers.c.teacher_id == teacher_id)
        )
        query = apply_scope(query, ResourceKind.SUBJECT, scope).order_by(Subject.name)
        result = await self.db.execute(query)
        subjects = [SubjectSummary.model_validate(s) for s in result.scalars().all()]

        logger.debug("Teacher subjects listed: teacher=%s count=%d", teacher_id, len(subjects))
        return subjects
