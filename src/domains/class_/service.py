# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class service for scoped class reads.

Every list takes the caller's row scope (an access predicate) and applies it
to the query. Single-class reads expect the caller to have checked access
first.
"""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.domains.access.predicates import Predicate, ResourceKind
from src.infrastructure.database.models import SchoolClass, Student
from src.infrastructure.database.scoping import apply_scope
from src.models.school import ClassDetail, ClassSummary, LessonSummary

logger = logging.getLogger(__name__)


class ClassService:
    """Service for reading classes.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_classes(
        self,
        scope: Predicate,
        search: str | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[ClassSummary], int]:
        """List classes inside the caller's scope.

        Args:
            scope: Row scope for ``ResourceKind.CLASS``.
            search: Case-insensitive match on class name.
            limit: Maximum results.
            offset: Pagination offset.

        Returns:
            Tuple of (list of classes, total count).
        """
        query = apply_scope(select(SchoolClass), ResourceKind.CLASS, scope)

        if search:
            query = query.where(SchoolClass.name.ilike(f"%{search}%"))

        count_result = await self.db.execute(
            select(func.count()).select_from(query.subquery())
        )
        total = count_result.scalar() or 0

        result = await self.db.execute(
            query.order_by(SchoolClass.name).limit(limit).offset(offset)
        )
        classes = result.scalars().all()

        counts = await self._student_counts([c.id for c in classes])
        items = [self._to_summary(c, counts.get(c.id, 0)) for c in classes]
        return items, total

    async def get_class(self, class_id: str) -> ClassDetail | None:
        """Get one class with its lessons. None if it does not exist."""
        result = await self.db.execute(
            select(SchoolClass)
            .options(selectinload(SchoolClass.lessons))
            .where(SchoolClass.id == class_id)
        )
        class_ = result.scalar_one_or_none()
        if class_ is None:
            return None

        counts = await self._student_counts([class_.id])
        summary = self._to_summary(class_, counts.get(class_.id, 0))
        return ClassDetail(
            **summary.model_dump(),
            lessons=[LessonSummary.model_validate(lesson) for lesson in class_.lessons],
        )

    async def _student_counts(self, class_ids: list[str]) -> dict[str, int]:
        if not class_ids:
            return {}
        result = await self.db.execute(
            select(Student.class_id, func.count(Student.id))
            .where(Student.class_id.in_(class_ids))
            .group_by(Student.class_id)
        )
        return {class_id: count for class_id, count in result.all()}

    @staticmethod
    def _to_summary(class_: SchoolClass, student_count: int) -> ClassSummary:
        return ClassSummary(
            id=class_.id,
            school_id=class_.school_id,
            name=class_.name,
            capacity=class_.capacity,
            supervisor_id=class_.supervisor_id,
            student_count=student_count,
        )
