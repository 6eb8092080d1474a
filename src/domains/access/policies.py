# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Per-role access policies.

Each role's rules live in exactly one ``AccessPolicy`` subclass. A policy
answers two questions:

- ``build_filter``: which rows of a kind the identity may list (no I/O).
- ``can_access``: whether the identity may touch one specific resource.

``PolicyRegistry`` maps a ``Role`` to its policy. The filter builder and the
relationship validator dispatch through it instead of branching on role.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from src.domains.access.identity import Identity
from src.domains.access.predicates import (
    CLASS_LINKED_KINDS,
    SCHOOL_WIDE_KINDS,
    Nothing,
    ParentSchools,
    ParentScoped,
    Predicate,
    ResourceKind,
    SchoolEquals,
    TeacherScoped,
    Unrestricted,
)
from src.domains.access.repository import AccessRepository
from src.domains.access.roles import Role
from src.domains.access.schools import MultiSchoolResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PolicyContext:
    """Data access available to a policy while deciding one request."""

    repository: AccessRepository
    schools: MultiSchoolResolver


class AccessPolicy(ABC):
    """Access rules for one role."""

    role: Role

    @abstractmethod
    def build_filter(self, identity: Identity, kind: ResourceKind) -> Predicate:
        """Return the row scope of ``kind`` for ``identity``."""

    @abstractmethod
    async def can_access(
        self,
        identity: Identity,
        kind: ResourceKind,
        resource_id: str,
        context: PolicyContext,
    ) -> bool:
        """Return whether ``identity`` may touch the resource.

        A missing resource yields False. The caller reports it as not found.
        """


class SuperAdminPolicy(AccessPolicy):
    role = Role.SUPER_ADMIN

    def build_filter(self, identity: Identity, kind: ResourceKind) -> Predicate:
        return Unrestricted()

    async def can_access(
        self,
        identity: Identity,
        kind: ResourceKind,
        resource_id: str,
        context: PolicyContext,
    ) -> bool:
        return True


class SchoolStaffPolicy(AccessPolicy):
    """School admins and principals see everything in their own school."""

    def __init__(self, role: Role) -> None:
        self.role = role

    def build_filter(self, identity: Identity, kind: ResourceKind) -> Predicate:
        return SchoolEquals(_school_of(identity))

    async def can_access(
        self,
        identity: Identity,
        kind: ResourceKind,
        resource_id: str,
        context: PolicyContext,
    ) -> bool:
        return await _in_own_school(identity, kind, resource_id, context)


class TeacherPolicy(AccessPolicy):
    """Teachers see class-linked rows through supervision or a lesson.

    School-wide kinds (subjects, content, colleagues) are scoped to the
    teacher's school.
    """

    role = Role.TEACHER

    def build_filter(self, identity: Identity, kind: ResourceKind) -> Predicate:
        if kind in CLASS_LINKED_KINDS or kind is ResourceKind.PARENT:
            return TeacherScoped(identity.subject_id)
        return SchoolEquals(_school_of(identity))

    async def can_access(
        self,
        identity: Identity,
        kind: ResourceKind,
        resource_id: str,
        context: PolicyContext,
    ) -> bool:
        teacher_id = identity.subject_id

        if kind in CLASS_LINKED_KINDS:
            relation = await context.repository.get_class_relation(kind, resource_id)
            if relation is None:
                return False
            return relation.involves(teacher_id)

        if kind is ResourceKind.PARENT:
            relations = await context.repository.list_children_class_relations(resource_id)
            return any(relation.involves(teacher_id) for relation in relations)

        return await _in_own_school(identity, kind, resource_id, context)


class ParentPolicy(AccessPolicy):
    """Parents see their own children and school-wide rows of their schools.

    Student-specific rows need a parent link. School-wide rows need the row's
    school to be one of the children's schools. The two rules stay separate.
    """

    role = Role.PARENT

    def build_filter(self, identity: Identity, kind: ResourceKind) -> Predicate:
        if kind in (ResourceKind.STUDENT, ResourceKind.PARENT):
            return ParentScoped(identity.subject_id)
        if kind in SCHOOL_WIDE_KINDS:
            return ParentSchools(identity.subject_id)
        return Nothing()

    async def can_access(
        self,
        identity: Identity,
        kind: ResourceKind,
        resource_id: str,
        context: PolicyContext,
    ) -> bool:
        parent_id = identity.subject_id

        if kind is ResourceKind.STUDENT:
            return await context.repository.has_parent_link(parent_id, resource_id)

        if kind is ResourceKind.PARENT:
            return resource_id == parent_id

        if kind in SCHOOL_WIDE_KINDS:
            school_id = await context.repository.get_school_id(kind, resource_id)
            if school_id is None:
                return False
            if identity.tenant_school_ids is not None:
                return school_id in identity.tenant_school_ids
            return school_id in await context.schools.resolve(parent_id)

        return False


def _school_of(identity: Identity) -> str:
    if identity.resolved_school_id is None:
        # Identities are only built by IdentityResolver, which always sets it
        raise ValueError(f"{identity.role.value} identity has no resolved school")
    return identity.resolved_school_id


async def _in_own_school(
    identity: Identity,
    kind: ResourceKind,
    resource_id: str,
    context: PolicyContext,
) -> bool:
    school_id = _school_of(identity)

    if kind is ResourceKind.PARENT:
        # A parent belongs to a school only through a child
        return school_id in await context.schools.resolve(resource_id)

    return await context.repository.get_school_id(kind, resource_id) == school_id


class PolicyRegistry:
    """Role to policy lookup."""

    def __init__(self) -> None:
        self._policies: dict[Role, AccessPolicy] = {}

    def register(self, policy: AccessPolicy) -> None:
        self._policies[policy.role] = policy

    def get(self, role: Role) -> AccessPolicy:
        try:
            return self._policies[role]
        except KeyError:
            raise LookupError(f"No access policy registered for role {role.value}") from None

    def roles(self) -> frozenset[Role]:
        return frozenset(self._policies)

    @classmethod
    def default(cls) -> "PolicyRegistry":
        registry = cls()
        registry.register(SuperAdminPolicy())
        registry.register(SchoolStaffPolicy(Role.SCHOOL_ADMIN))
        registry.register(SchoolStaffPolicy(Role.PRINCIPAL))
        registry.register(TeacherPolicy())
        registry.register(ParentPolicy())
        return registry


_default_registry: PolicyRegistry | None = None


def get_policy_registry() -> PolicyRegistry:
    """Shared registry of the built-in policies. Policies hold no state."""
    global _default_registry
    if _default_registry is None:
        _default_registry = PolicyRegistry.default()
    return _default_registry
