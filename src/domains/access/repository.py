# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Read-only lookups the access core needs from the data layer.

The access core depends on this interface only. The SQL implementation lives
in ``src.infrastructure.database.access_repository``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from src.domains.access.predicates import ResourceKind
from src.domains.access.roles import Role


@dataclass(frozen=True)
class ClassRelation:
    """The relations that decide teacher visibility of one class.

    Attributes:
        class_id: Class id.
        school_id: School owning the class.
        supervisor_id: Supervising teacher, if any.
        lesson_teacher_ids: Teachers with at least one lesson in the class.
    """

    class_id: str
    school_id: str
    supervisor_id: str | None = None
    lesson_teacher_ids: frozenset[str] = field(default_factory=frozenset)

    def involves(self, teacher_id: str) -> bool:
        """True if the teacher supervises the class or teaches a lesson in it."""
        return self.supervisor_id == teacher_id or teacher_id in self.lesson_teacher_ids


class AccessRepository(ABC):
    """Typed lookups used for identity resolution and access decisions.

    Every method returns None, False or an empty collection when the row is
    missing. None of them raise for absent data.
    """

    @abstractmethod
    async def get_staff_school_id(self, role: Role, subject_id: str) -> str | None:
        """School of the staff profile for ``role``, None if no profile exists."""

    @abstractmethod
    async def parent_exists(self, parent_id: str) -> bool:
        """Whether a parent profile exists for the subject."""

    @abstractmethod
    async def get_school_id(self, kind: ResourceKind, resource_id: str) -> str | None:
        """School owning the resource, None if the resource does not exist.

        Parents have no school; ``ResourceKind.PARENT`` always yields None.
        """

    @abstractmethod
    async def get_class_relation(
        self, kind: ResourceKind, resource_id: str
    ) -> ClassRelation | None:
        """Class relation for a class, or for the class of a student or lesson.

        Returns None when the resource is missing or is not in a class.
        """

    @abstractmethod
    async def list_children_class_relations(self, parent_id: str) -> list[ClassRelation]:
        """Class relations of every class the parent's children are in."""

    @abstractmethod
    async def has_parent_link(self, parent_id: str, student_id: str) -> bool:
        """Whether any parent link (primary or not) joins parent and student."""

    @abstractmethod
    async def get_parent_school_ids(self, parent_id: str) -> frozenset[str]:
        """Distinct schools of the parent's children."""
