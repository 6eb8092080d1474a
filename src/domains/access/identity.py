# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Identity context and its resolver.

An ``Identity`` is built once per request from verified claims and never
changes afterwards. Staff identities carry the school of their profile.
Parent identities never carry a single school: their visibility is the union
of their children's schools and is resolved separately.
"""

import logging
from dataclasses import dataclass

from src.domains.access.credentials import Claims
from src.domains.access.errors import AccessErrorKind, AccessOutcome
from src.domains.access.repository import AccessRepository
from src.domains.access.roles import Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Request-scoped caller identity.

    Attributes:
        subject_id: User id. Also the id of the caller's profile row.
        role: Caller role.
        resolved_school_id: Profile school for staff roles, None otherwise.
        tenant_school_ids: Children's schools for a parent, once resolved.
    """

    subject_id: str
    role: Role
    resolved_school_id: str | None = None
    tenant_school_ids: frozenset[str] | None = None

    @property
    def is_super_admin(self) -> bool:
        return self.role is Role.SUPER_ADMIN

    @property
    def is_parent(self) -> bool:
        return self.role is Role.PARENT


class IdentityResolver:
    """Loads the backing profile for verified claims.

    Attributes:
        repository: Lookups for staff and parent profiles.
    """

    def __init__(self, repository: AccessRepository) -> None:
        self.repository = repository

    async def resolve(self, claims: Claims) -> AccessOutcome[Identity]:
        """Build the identity for ``claims``.

        A super admin needs no read. A staff role needs exactly one profile
        and takes its school from it, ignoring any school claim in the token.
        A parent needs an existing parent profile.

        Args:
            claims: Verified claims.

        Returns:
            The identity, or ``IDENTITY_INCOMPLETE`` when the profile is
            missing.
        """
        role = claims.role

        if role is Role.SUPER_ADMIN:
            return AccessOutcome.ok(Identity(subject_id=claims.subject_id, role=role))

        if role.is_school_scoped:
            school_id = await self.repository.get_staff_school_id(role, claims.subject_id)
            if school_id is None:
                return AccessOutcome.fail(
                    AccessErrorKind.IDENTITY_INCOMPLETE,
                    f"no {role.value} profile for subject",
                )
            if claims.school_id and claims.school_id != school_id:
                logger.info(
                    "Stale school claim ignored: subject=%s claimed=%s profile=%s",
                    claims.subject_id,
                    claims.school_id,
                    school_id,
                )
            return AccessOutcome.ok(
                Identity(
                    subject_id=claims.subject_id,
                    role=role,
                    resolved_school_id=school_id,
                )
            )

        if not await self.repository.parent_exists(claims.subject_id):
            return AccessOutcome.fail(
                AccessErrorKind.IDENTITY_INCOMPLETE,
                "no PARENT profile for subject",
            )
        return AccessOutcome.ok(Identity(subject_id=claims.subject_id, role=role))
