# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Compile access predicates into SQLAlchemy clauses.

The access domain describes row scopes as plain values; this module turns a
scope into a ``WHERE`` clause for the table of a resource kind. Parent school
sets are expanded here as a subquery, so a parent-scoped list is one
statement.

Example:
    stmt = select(Student).order_by(Student.last_name)
    stmt = apply_scope(stmt, ResourceKind.STUDENT, access.build_filter(identity, ResourceKind.STUDENT))
    students = (await db.execute(stmt)).scalars().all()
"""

from typing import Any, Callable, TypeVar

from sqlalchemy import ColumnElement, Select, false, or_, select, true

from src.domains.access.predicates import (
    Nothing,
    ParentSchools,
    ParentScoped,
    Predicate,
    ResourceKind,
    SchoolEquals,
    SchoolIn,
    TeacherScoped,
    Unrestricted,
)
from src.infrastructure.database.models import (
    Announcement,
    Assignment,
    Event,
    Lesson,
    Parent,
    School,
    SchoolClass,
    Student,
    StudentParent,
    Subject,
    Teacher,
)

S = TypeVar("S", bound=Select)

MODELS: dict[ResourceKind, Any] = {
    ResourceKind.SCHOOL: School,
    ResourceKind.CLASS: SchoolClass,
    ResourceKind.STUDENT: Student,
    ResourceKind.PARENT: Parent,
    ResourceKind.TEACHER: Teacher,
    ResourceKind.SUBJECT: Subject,
    ResourceKind.LESSON: Lesson,
    ResourceKind.ASSIGNMENT: Assignment,
    ResourceKind.EVENT: Event,
    ResourceKind.ANNOUNCEMENT: Announcement,
}

# Column holding the class id for kinds reached through a class
_CLASS_COLUMNS = {
    ResourceKind.CLASS: SchoolClass.id,
    ResourceKind.STUDENT: Student.class_id,
    ResourceKind.LESSON: Lesson.class_id,
    ResourceKind.ASSIGNMENT: Assignment.class_id,
    ResourceKind.EVENT: Event.class_id,
    ResourceKind.ANNOUNCEMENT: Announcement.class_id,
}


class UnsupportedScopeError(ValueError):
    """Raised when a predicate has no meaning for a resource kind."""

    def __init__(self, predicate: Predicate, kind: ResourceKind) -> None:
        super().__init__(f"{type(predicate).__name__} cannot scope {kind.value}")
        self.predicate = predicate
        self.kind = kind


def parent_school_ids_subquery(parent_id: str) -> Select:
    """``SELECT DISTINCT students.school_id`` over every child of the parent."""
    return (
        select(Student.school_id)
        .join(StudentParent, StudentParent.student_id == Student.id)
        .where(StudentParent.parent_id == parent_id)
        .distinct()
        .correlate(None)
    )


def teacher_class_ids_clause(class_column: Any, teacher_id: str) -> ColumnElement[bool]:
    """Class supervised by the teacher OR class with a lesson by the teacher."""
    # Uncorrelated, the outer query may select from the same tables
    supervised = (
        select(SchoolClass.id).where(SchoolClass.supervisor_id == teacher_id).correlate(None)
    )
    taught = select(Lesson.class_id).where(Lesson.teacher_id == teacher_id).correlate(None)
    return or_(class_column.in_(supervised), class_column.in_(taught))


def compile_predicate(kind: ResourceKind, predicate: Predicate) -> ColumnElement[bool]:
    """Compile a predicate into a boolean clause over the table of ``kind``.

    Args:
        kind: Resource kind being queried.
        predicate: Row scope produced by the tenant filter builder.

    Returns:
        A clause suitable for ``Select.where``.

    Raises:
        UnsupportedScopeError: If the predicate cannot apply to the kind.
    """
    if isinstance(predicate, Unrestricted):
        return true()

    if isinstance(predicate, Nothing):
        return false()

    if isinstance(predicate, SchoolEquals):
        return _school_clause(kind, lambda column: column == predicate.school_id)

    if isinstance(predicate, SchoolIn):
        if not predicate.school_ids:
            return false()
        school_ids = sorted(predicate.school_ids)
        return _school_clause(kind, lambda column: column.in_(school_ids))

    if isinstance(predicate, ParentSchools):
        subquery = parent_school_ids_subquery(predicate.parent_id)
        return _school_clause(kind, lambda column: column.in_(subquery))

    if isinstance(predicate, TeacherScoped):
        if kind is ResourceKind.PARENT:
            # Parents with at least one child in one of the teacher's classes
            return (
                select(StudentParent.id)
                .join(Student, Student.id == StudentParent.student_id)
                .where(
                    StudentParent.parent_id == Parent.user_id,
                    teacher_class_ids_clause(Student.class_id, predicate.teacher_id),
                )
                .exists()
            )
        class_column = _CLASS_COLUMNS.get(kind)
        if class_column is None:
            raise UnsupportedScopeError(predicate, kind)
        return teacher_class_ids_clause(class_column, predicate.teacher_id)

    if isinstance(predicate, ParentScoped):
        if kind is ResourceKind.STUDENT:
            return (
                select(StudentParent.id)
                .where(
                    StudentParent.student_id == Student.id,
                    StudentParent.parent_id == predicate.parent_id,
                )
                .exists()
            )
        if kind is ResourceKind.PARENT:
            return Parent.user_id == predicate.parent_id
        raise UnsupportedScopeError(predicate, kind)

    raise TypeError(f"Unknown predicate: {predicate!r}")


def apply_scope(stmt: S, kind: ResourceKind, predicate: Predicate) -> S:
    """Add the compiled predicate to ``stmt`` as a ``WHERE`` clause."""
    return stmt.where(compile_predicate(kind, predicate))


def _school_clause(
    kind: ResourceKind,
    condition: Callable[[Any], ColumnElement[bool]],
) -> ColumnElement[bool]:
    if kind is ResourceKind.SCHOOL:
        return condition(School.id)

    if kind is ResourceKind.PARENT:
        # A parent belongs to a school through any of its children
        return (
            select(StudentParent.id)
            .join(Student, Student.id == StudentParent.student_id)
            .where(
                StudentParent.parent_id == Parent.user_id,
                condition(Student.school_id),
            )
            .exists()
        )

    return condition(MODELS[kind].school_id)
