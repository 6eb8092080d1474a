# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy implementation of the access repository.

Each lookup is one or two small ``SELECT`` statements on the request's
``AsyncSession``. Nothing here writes.
"""

import logging

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.access.predicates import ResourceKind
from src.domains.access.repository import AccessRepository, ClassRelation
from src.domains.access.roles import Role
from src.infrastructure.database.models import (
    Announcement,
    Assignment,
    Event,
    Lesson,
    Parent,
    Principal,
    School,
    SchoolAdmin,
    SchoolClass,
    Student,
    StudentParent,
    Subject,
    Teacher,
)

logger = logging.getLogger(__name__)

_STAFF_PROFILES = {
    Role.SCHOOL_ADMIN: SchoolAdmin,
    Role.PRINCIPAL: Principal,
    Role.TEACHER: Teacher,
}

# (id column, school column) per kind. Parents have no school column.
_SCHOOL_COLUMNS = {
    ResourceKind.SCHOOL: (School.id, School.id),
    ResourceKind.CLASS: (SchoolClass.id, SchoolClass.school_id),
    ResourceKind.STUDENT: (Student.id, Student.school_id),
    ResourceKind.TEACHER: (Teacher.user_id, Teacher.school_id),
    ResourceKind.SUBJECT: (Subject.id, Subject.school_id),
    ResourceKind.LESSON: (Lesson.id, Lesson.school_id),
    ResourceKind.ASSIGNMENT: (Assignment.id, Assignment.school_id),
    ResourceKind.EVENT: (Event.id, Event.school_id),
    ResourceKind.ANNOUNCEMENT: (Announcement.id, Announcement.school_id),
}


class SqlAccessRepository(AccessRepository):
    """Access lookups over the shared schema.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_staff_school_id(self, role: Role, subject_id: str) -> str | None:
        model = _STAFF_PROFILES.get(role)
        if model is None:
            return None
        result = await self.db.execute(
            select(model.school_id).where(model.user_id == subject_id)
        )
        return result.scalar_one_or_none()

    async def parent_exists(self, parent_id: str) -> bool:
        result = await self.db.execute(
            select(exists().where(Parent.user_id == parent_id))
        )
        return bool(result.scalar())

    async def get_school_id(self, kind: ResourceKind, resource_id: str) -> str | None:
        columns = _SCHOOL_COLUMNS.get(kind)
        if columns is None:
            return None
        id_column, school_column = columns
        result = await self.db.execute(select(school_column).where(id_column == resource_id))
        return result.scalar_one_or_none()

    async def get_class_relation(
        self, kind: ResourceKind, resource_id: str
    ) -> ClassRelation | None:
        class_id = await self._class_id_of(kind, resource_id)
        if class_id is None:
            return None
        return await self._load_class_relation(class_id)

    async def list_children_class_relations(self, parent_id: str) -> list[ClassRelation]:
        stmt = (
            select(Student.class_id)
            .join(StudentParent, StudentParent.student_id == Student.id)
            .where(
                StudentParent.parent_id == parent_id,
                Student.class_id.is_not(None),
            )
            .distinct()
        )
        result = await self.db.execute(stmt)

        relations = []
        for class_id in result.scalars().all():
            relation = await self._load_class_relation(class_id)
            if relation is not None:
                relations.append(relation)
        return relations

    async def has_parent_link(self, parent_id: str, student_id: str) -> bool:
        stmt = select(
            exists().where(
                StudentParent.parent_id == parent_id,
                StudentParent.student_id == student_id,
            )
        )
        result = await self.db.execute(stmt)
        return bool(result.scalar())

    async def get_parent_school_ids(self, parent_id: str) -> frozenset[str]:
        stmt = (
            select(Student.school_id)
            .join(StudentParent, StudentParent.student_id == Student.id)
            .where(StudentParent.parent_id == parent_id)
            .distinct()
        )
        result = await self.db.execute(stmt)
        return frozenset(result.scalars().all())

    async def _class_id_of(self, kind: ResourceKind, resource_id: str) -> str | None:
        if kind is ResourceKind.CLASS:
            return resource_id
        if kind is ResourceKind.STUDENT:
            stmt = select(Student.class_id).where(Student.id == resource_id)
        elif kind is ResourceKind.LESSON:
            stmt = select(Lesson.class_id).where(Lesson.id == resource_id)
        else:
            raise ValueError(f"{kind.value} is not reached through a class")
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def _load_class_relation(self, class_id: str) -> ClassRelation | None:
        result = await self.db.execute(
            select(SchoolClass.id, SchoolClass.school_id, SchoolClass.supervisor_id).where(
                SchoolClass.id == class_id
            )
        )
        row = result.one_or_none()
        if row is None:
            return None

        teachers = await self.db.execute(
            select(Lesson.teacher_id).where(Lesson.class_id == class_id).distinct()
        )
        return ClassRelation(
            class_id=row.id,
            school_id=row.school_id,
            supervisor_id=row.supervisor_id,
            lesson_teacher_ids=frozenset(teachers.scalars().all()),
        )
