# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tenant filter builder.

Turns an identity and a resource kind into a ``Predicate``. No I/O happens
here; the data layer compiles the predicate when it runs the query.

Example:
    >>> builder = TenantFilterBuilder()
    >>> builder.build(Identity("t1", Role.TEACHER, "s1"), ResourceKind.STUDENT)
    TeacherScoped(teacher_id='t1')
"""

from src.domains.access.identity import Identity
from src.domains.access.policies import PolicyRegistry, get_policy_registry
from src.domains.access.predicates import Predicate, ResourceKind


class TenantFilterBuilder:
    """Dispatches filter construction to the identity's role policy.

    Attributes:
        registry: Role to policy lookup.
    """

    def __init__(self, registry: PolicyRegistry | None = None) -> None:
        self.registry = registry or get_policy_registry()

    def build(self, identity: Identity, kind: ResourceKind) -> Predicate:
        return self.registry.get(identity.role).build_filter(identity, kind)
