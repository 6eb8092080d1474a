# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Storage-agnostic row scopes.

A predicate describes which rows of a resource kind an identity may see. It
carries ids only; ``src.infrastructure.database.scoping`` compiles it into a
SQLAlchemy clause for the kind being queried.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ResourceKind(str, Enum):
    """Resource kinds the access core knows how to scope."""

    SCHOOL = "school"
    CLASS = "class"
    STUDENT = "student"
    PARENT = "parent"
    TEACHER = "teacher"
    SUBJECT = "subject"
    LESSON = "lesson"
    ASSIGNMENT = "assignment"
    EVENT = "event"
    ANNOUNCEMENT = "announcement"


# Kinds a teacher reaches only through a class (supervision or a lesson).
CLASS_LINKED_KINDS: frozenset[ResourceKind] = frozenset(
    {ResourceKind.CLASS, ResourceKind.STUDENT, ResourceKind.LESSON}
)

# Kinds visible to a parent for every school one of its children attends.
SCHOOL_WIDE_KINDS: frozenset[ResourceKind] = frozenset(
    {
        ResourceKind.SCHOOL,
        ResourceKind.CLASS,
        ResourceKind.SUBJECT,
        ResourceKind.LESSON,
        ResourceKind.ASSIGNMENT,
        ResourceKind.EVENT,
        ResourceKind.ANNOUNCEMENT,
    }
)


@dataclass(frozen=True)
class Unrestricted:
    """Every row."""


@dataclass(frozen=True)
class Nothing:
    """No row."""


@dataclass(frozen=True)
class SchoolEquals:
    school_id: str


@dataclass(frozen=True)
class SchoolIn:
    """Rows of any of the given schools. An empty set matches nothing."""

    school_ids: frozenset[str]


@dataclass(frozen=True)
class ParentSchools:
    """Rows of any school attended by one of the parent's children.

    The school set is expanded by the data layer at query time.
    """

    parent_id: str


@dataclass(frozen=True)
class TeacherScoped:
    """Rows reached through a class the teacher supervises or teaches in."""

    teacher_id: str


@dataclass(frozen=True)
class ParentScoped:
    """Rows linked to the parent directly (own children, own profile)."""

    parent_id: str


Predicate = Union[
    Unrestricted,
    Nothing,
    SchoolEquals,
    SchoolIn,
    ParentSchools,
    TeacherScoped,
    ParentScoped,
]
