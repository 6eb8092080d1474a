# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Relationship access validator for single-resource operations.

Used where a list predicate would be wasteful or where the relation is not a
flat filter, e.g. a teacher reaching a student through a lesson in the
student's class without supervising it.
"""

import logging

from src.domains.access.identity import Identity
from src.domains.access.policies import PolicyContext, PolicyRegistry, get_policy_registry
from src.domains.access.predicates import ResourceKind
from src.domains.access.repository import AccessRepository
from src.domains.access.schools import MultiSchoolResolver

logger = logging.getLogger(__name__)


class RelationshipAccessValidator:
    """Answers yes/no for one identity and one resource instance.

    Attributes:
        repository: Lookups for school ownership and class relations.
        schools: Parent school resolver.
        registry: Role to policy lookup.
    """

    def __init__(
        self,
        repository: AccessRepository,
        schools: MultiSchoolResolver | None = None,
        registry: PolicyRegistry | None = None,
    ) -> None:
        self.repository = repository
        self.schools = schools or MultiSchoolResolver(repository)
        self.registry = registry or get_policy_registry()

    async def can_access(
        self,
        identity: Identity,
        kind: ResourceKind,
        resource_id: str,
    ) -> bool:
        """Return whether the identity may touch the resource.

        Never raises for a missing resource; that case returns False and the
        caller reports it as not found.

        Args:
            identity: Resolved caller identity.
            kind: Kind of the target resource.
            resource_id: Target id.

        Returns:
            True if access is allowed.
        """
        policy = self.registry.get(identity.role)
        context = PolicyContext(repository=self.repository, schools=self.schools)
        allowed = await policy.can_access(identity, kind, resource_id, context)

        logger.debug(
            "Access check: subject=%s role=%s kind=%s resource=%s allowed=%s",
            identity.subject_id,
            identity.role.value,
            kind.value,
            resource_id,
            allowed,
        )
        return allowed
