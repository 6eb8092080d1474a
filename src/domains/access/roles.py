# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Closed role set and the role gate.

The role gate is pure set membership. It runs on the verified credential
before any profile is loaded, so a caller whose role is not permitted never
causes a database read.
"""

import logging
from enum import Enum
from typing import Iterable

from src.domains.access.errors import AccessErrorKind, AccessOutcome

logger = logging.getLogger(__name__)


class Role(str, Enum):
    """Every role the system knows about."""

    SUPER_ADMIN = "SUPER_ADMIN"
    SCHOOL_ADMIN = "SCHOOL_ADMIN"
    PRINCIPAL = "PRINCIPAL"
    TEACHER = "TEACHER"
    PARENT = "PARENT"

    @classmethod
    def parse(cls, value: str | None) -> "Role | None":
        """Return the role for ``value`` or None when it is not a known role."""
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def is_school_scoped(self) -> bool:
        """True for staff roles bound to exactly one school."""
        return self in SCHOOL_SCOPED_ROLES


SCHOOL_SCOPED_ROLES: frozenset[Role] = frozenset(
    {Role.SCHOOL_ADMIN, Role.PRINCIPAL, Role.TEACHER}
)
SCHOOL_MANAGEMENT_ROLES: frozenset[Role] = frozenset(
    {Role.SUPER_ADMIN, Role.SCHOOL_ADMIN, Role.PRINCIPAL}
)
ALL_ROLES: frozenset[Role] = frozenset(Role)


class RoleGate:
    """Checks a role against the roles an operation permits.

    Attributes:
        permitted_roles: Roles allowed through the gate.
    """

    def __init__(self, permitted_roles: Iterable[Role]) -> None:
        self.permitted_roles = frozenset(permitted_roles)

    def check(self, role: Role) -> AccessOutcome[Role]:
        if role in self.permitted_roles:
            return AccessOutcome.ok(role)
        return AccessOutcome.fail(
            AccessErrorKind.FORBIDDEN,
            f"role {role.value} not in permitted roles",
        )

    def __repr__(self) -> str:
        roles = ", ".join(sorted(r.value for r in self.permitted_roles))
        return f"RoleGate({roles})"
