# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests

The ``school_graph`` fixture is an in-memory ``AccessRepository`` holding a
small two-school world (plus an unrelated third school) that most access
tests run against:

- School A: classes C1 (supervised by T1) and C2 (no supervisor, T2 teaches
  a lesson in it), students S1 (C1), S2 (C2) and S4 (no class).
- School B: class C3 (supervised by T3), student S3 (C3).
- School C: no students, one event.
- Parent P1 is linked to S1 (primary) and S3 (secondary), so spans A and B.
- Parent P2 is linked to S2. Parent P3 has no children.
"""

import os

# Must run before the application (and its module-level limiter) is imported
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-testing-only")

from dataclasses import dataclass, field
from unittest.mock import MagicMock

import pytest
from pydantic import SecretStr

from src.domains.access.predicates import ResourceKind
from src.domains.access.repository import AccessRepository, ClassRelation
from src.domains.access.roles import Role
from src.domains.auth.jwt import JWTManager


# =============================================================================
# In-memory access repository
# =============================================================================


@dataclass
class InMemoryAccessRepository(AccessRepository):
    """Dict-backed ``AccessRepository`` that records every call."""

    staff: dict[tuple[Role, str], str] = field(default_factory=dict)
    parents: set[str] = field(default_factory=set)
    schools: set[str] = field(default_factory=set)
    # class_id -> (school_id, supervisor_id)
    classes: dict[str, tuple[str, str | None]] = field(default_factory=dict)
    # lesson_id -> (class_id, teacher_id)
    lessons: dict[str, tuple[str, str]] = field(default_factory=dict)
    # student_id -> (school_id, class_id)
    students: dict[str, tuple[str, str | None]] = field(default_factory=dict)
    links: set[tuple[str, str]] = field(default_factory=set)
    # (kind, id) -> school_id for content, subjects and teachers
    owned: dict[tuple[ResourceKind, str], str] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    async def get_staff_school_id(self, role: Role, subject_id: str) -> str | None:
        self.calls.append("get_staff_school_id")
        return self.staff.get((role, subject_id))

    async def parent_exists(self, parent_id: str) -> bool:
        self.calls.append("parent_exists")
        return parent_id in self.parents

    async def get_school_id(self, kind: ResourceKind, resource_id: str) -> str | None:
        self.calls.append("get_school_id")
        if kind is ResourceKind.SCHOOL:
            return resource_id if resource_id in self.schools else None
        if kind is ResourceKind.CLASS:
            row = self.classes.get(resource_id)
            return row[0] if row else None
        if kind is ResourceKind.STUDENT:
            row = self.students.get(resource_id)
            return row[0] if row else None
        if kind is ResourceKind.LESSON:
            lesson = self.lessons.get(resource_id)
            return self.classes[lesson[0]][0] if lesson else None
        if kind is ResourceKind.PARENT:
            return None
        return self.owned.get((kind, resource_id))

    async def get_class_relation(
        self, kind: ResourceKind, resource_id: str
    ) -> ClassRelation | None:
        self.calls.append("get_class_relation")
        if kind is ResourceKind.CLASS:
            class_id = resource_id
        elif kind is ResourceKind.STUDENT:
            row = self.students.get(resource_id)
            class_id = row[1] if row else None
        elif kind is ResourceKind.LESSON:
            lesson = self.lessons.get(resource_id)
            class_id = lesson[0] if lesson else None
        else:
            raise ValueError(f"{kind.value} is not linked to a class")
        return self._relation(class_id)

    async def list_children_class_relations(self, parent_id: str) -> list[ClassRelation]:
        self.calls.append("list_children_class_relations")
        class_ids = {
            self.students[student_id][1]
            for linked_parent, student_id in self.links
            if linked_parent == parent_id
        }
        return [r for r in (self._relation(c) for c in class_ids) if r is not None]

    async def has_parent_link(self, parent_id: str, student_id: str) -> bool:
        self.calls.append("has_parent_link")
        return (parent_id, student_id) in self.links

    async def get_parent_school_ids(self, parent_id: str) -> frozenset[str]:
        self.calls.append("get_parent_school_ids")
        return frozenset(
            self.students[student_id][0]
            for linked_parent, student_id in self.links
            if linked_parent == parent_id
        )

    def _relation(self, class_id: str | None) -> ClassRelation | None:
        if class_id is None or class_id not in self.classes:
            return None
        school_id, supervisor_id = self.classes[class_id]
        teachers = frozenset(t for c, t in self.lessons.values() if c == class_id)
        return ClassRelation(class_id, school_id, supervisor_id, teachers)


@pytest.fixture
def school_graph() -> InMemoryAccessRepository:
    """Two schools, their staff, classes, students and parents."""
    repo = InMemoryAccessRepository()
    repo.schools.update({"A", "B", "C"})
    repo.staff.update({
        (Role.SCHOOL_ADMIN, "ADM-A"): "A",
        (Role.PRINCIPAL, "PRI-B"): "B",
        (Role.TEACHER, "T1"): "A",
        (Role.TEACHER, "T2"): "A",
        (Role.TEACHER, "T3"): "B",
    })
    repo.classes.update({
        "C1": ("A", "T1"),
        "C2": ("A", None),
        "C3": ("B", "T3"),
    })
    repo.lessons.update({
        "L1": ("C1", "T1"),
        "L2": ("C2", "T2"),
        "L3": ("C3", "T3"),
    })
    repo.students.update({
        "S1": ("A", "C1"),
        "S2": ("A", "C2"),
        "S3": ("B", "C3"),
        "S4": ("A", None),
    })
    repo.parents.update({"P1", "P2", "P3"})
    repo.links.update({("P1", "S1"), ("P1", "S3"), ("P2", "S2")})
    repo.owned.update({
        (ResourceKind.EVENT, "E-A"): "A",
        (ResourceKind.EVENT, "E-B"): "B",
        (ResourceKind.EVENT, "E-C"): "C",
        (ResourceKind.SUBJECT, "MATH-A"): "A",
        (ResourceKind.TEACHER, "T1"): "A",
        (ResourceKind.TEACHER, "T3"): "B",
    })
    return repo


# =============================================================================
# JWT Fixtures
# =============================================================================


@pytest.fixture
def jwt_settings() -> MagicMock:
    """Create mock JWT settings."""
    settings = MagicMock()
    settings.secret_key = SecretStr("test-secret-key-for-jwt-testing")
    settings.algorithm = "HS256"
    settings.access_token_expire_minutes = 30
    settings.refresh_token_expire_days = 7
    return settings


@pytest.fixture
def jwt_manager(jwt_settings: MagicMock) -> JWTManager:
    """Create JWT manager with test settings."""
    return JWTManager(jwt_settings)


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (requires services)"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
