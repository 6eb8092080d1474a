# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for compiling access predicates into SQL.

Statements are compiled for PostgreSQL with inlined literals and checked
for the clauses that carry the scope.
"""

import pytest
from sqlalchemy import select
from sqlalchemy.dialects import postgresql
from sqlalchemy.sql.elements import False_, True_

from src.domains.access.predicates import (
    Nothing,
    ParentSchools,
    ParentScoped,
    ResourceKind,
    SchoolEquals,
    SchoolIn,
    TeacherScoped,
    Unrestricted,
)
from src.infrastructure.database.models import Event, Parent, School, Student
from src.infrastructure.database.scoping import (
    UnsupportedScopeError,
    apply_scope,
    compile_predicate,
)


def _sql(stmt) -> str:
    compiled = stmt.compile(dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True})
    return " ".join(str(compiled).split())


class TestCompilePredicate:
    """Tests for compile_predicate."""

    def test_unrestricted_is_true(self) -> None:
        assert isinstance(compile_predicate(ResourceKind.STUDENT, Unrestricted()), True_)

    def test_nothing_is_false(self) -> None:
        assert isinstance(compile_predicate(ResourceKind.TEACHER, Nothing()), False_)

    def test_empty_school_set_is_false(self) -> None:
        """A parent without children matches no row."""
        assert isinstance(compile_predicate(ResourceKind.EVENT, SchoolIn(frozenset())), False_)

    def test_school_equals_on_school_column(self) -> None:
        sql = _sql(apply_scope(select(Student), ResourceKind.STUDENT, SchoolEquals("A")))

        assert "students.school_id = 'A'" in sql

    def test_school_equals_on_schools_table(self) -> None:
        sql = _sql(apply_scope(select(School), ResourceKind.SCHOOL, SchoolEquals("A")))

        assert "schools.id = 'A'" in sql

    def test_school_equals_on_parents_goes_through_children(self) -> None:
        sql = _sql(apply_scope(select(Parent), ResourceKind.PARENT, SchoolEquals("A")))

        assert "EXISTS" in sql
        assert "student_parents.parent_id = parents.user_id" in sql
        assert "students.school_id = 'A'" in sql

    def test_school_in(self) -> None:
        predicate = SchoolIn(frozenset({"B", "A"}))

        sql = _sql(apply_scope(select(Event), ResourceKind.EVENT, predicate))

        assert "events.school_id IN ('A', 'B')" in sql

    def test_parent_schools_is_one_statement(self) -> None:
        sql = _sql(apply_scope(select(Event), ResourceKind.EVENT, ParentSchools("P1")))

        assert "events.school_id IN (SELECT DISTINCT students.school_id" in sql
        assert "student_parents.parent_id = 'P1'" in sql

    def test_teacher_scoped_students(self) -> None:
        """Supervised classes OR classes with a lesson by the teacher."""
        sql = _sql(apply_scope(select(Student), ResourceKind.STUDENT, TeacherScoped("T1")))

        assert "students.class_id IN (SELECT classes.id" in sql
        assert "classes.supervisor_id = 'T1'" in sql
        assert "students.class_id IN (SELECT lessons.class_id" in sql
        assert "lessons.teacher_id = 'T1'" in sql
        assert " OR " in sql

    def test_teacher_scoped_parents(self) -> None:
        sql = _sql(apply_scope(select(Parent), ResourceKind.PARENT, TeacherScoped("T1")))

        assert "EXISTS" in sql
        assert "student_parents.parent_id = parents.user_id" in sql
        assert "lessons.teacher_id = 'T1'" in sql

    def test_parent_scoped_students(self) -> None:
        sql = _sql(apply_scope(select(Student), ResourceKind.STUDENT, ParentScoped("P1")))

        assert "EXISTS (SELECT student_parents.id" in sql
        assert "student_parents.student_id = students.id" in sql
        assert "student_parents.parent_id = 'P1'" in sql

    def test_parent_scoped_own_profile(self) -> None:
        sql = _sql(apply_scope(select(Parent), ResourceKind.PARENT, ParentScoped("P1")))

        assert "parents.user_id = 'P1'" in sql

    @pytest.mark.parametrize(
        ("kind", "predicate"),
        [
            (ResourceKind.SUBJECT, TeacherScoped("T1")),
            (ResourceKind.TEACHER, TeacherScoped("T1")),
            (ResourceKind.EVENT, ParentScoped("P1")),
            (ResourceKind.SCHOOL, ParentScoped("P1")),
        ],
    )
    def test_unsupported_combinations_raise(self, kind, predicate) -> None:
        with pytest.raises(UnsupportedScopeError):
            compile_predicate(kind, predicate)

    def test_unknown_predicate_raises(self) -> None:
        with pytest.raises(TypeError):
            compile_predicate(ResourceKind.STUDENT, object())  # type: ignore[arg-type]
