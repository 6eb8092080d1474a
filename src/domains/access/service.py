# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Access service, the entry point collaborators call.

Flow for every request:

1. Credential verification (no I/O).
2. Role gate against the operation's permitted roles (no I/O).
3. Identity resolution from the backing profile (one read).

Afterwards collaborators ask either ``build_filter`` (list and search) or
``can_access`` (single resource) before touching the data store.

Example:
    service = AccessService(repository, jwt_manager)
    outcome = await service.resolve_identity(token, {Role.TEACHER})
    identity = outcome.unwrap()
    predicate = service.build_filter(identity, ResourceKind.STUDENT)
"""

import dataclasses
import logging
from typing import Iterable

from src.domains.access.credentials import Claims, CredentialVerifier
from src.domains.access.errors import AccessErrorKind, AccessOutcome
from src.domains.access.filters import TenantFilterBuilder
from src.domains.access.identity import Identity, IdentityResolver
from src.domains.access.policies import PolicyRegistry, get_policy_registry
from src.domains.access.predicates import Predicate, ResourceKind
from src.domains.access.repository import AccessRepository
from src.domains.access.roles import Role, RoleGate
from src.domains.access.schools import MultiSchoolResolver, RequestScopedSchoolCache
from src.domains.access.validator import RelationshipAccessValidator
from src.domains.auth.jwt import JWTManager

logger = logging.getLogger(__name__)


class AccessService:
    """Facade over the access components for one request.

    Create one instance per request; the parent school cache it holds is
    request-scoped.

    Attributes:
        repository: Read-only lookups.
        verifier: Credential verifier.
        resolver: Identity context resolver.
        filters: Tenant filter builder.
        validator: Relationship access validator.
        schools: Multi-school resolver.
    """

    def __init__(
        self,
        repository: AccessRepository,
        jwt_manager: JWTManager | None = None,
        registry: PolicyRegistry | None = None,
    ) -> None:
        registry = registry or get_policy_registry()
        self.repository = repository
        self.verifier = CredentialVerifier(jwt_manager or JWTManager())
        self.resolver = IdentityResolver(repository)
        self.schools = MultiSchoolResolver(repository, RequestScopedSchoolCache())
        self.filters = TenantFilterBuilder(registry)
        self.validator = RelationshipAccessValidator(repository, self.schools, registry)

    async def resolve_identity(
        self,
        credential: str | None,
        permitted_roles: Iterable[Role],
    ) -> AccessOutcome[Identity]:
        """Verify the credential, gate the role and resolve the identity.

        Args:
            credential: Raw bearer token.
            permitted_roles: Roles the operation allows.

        Returns:
            The identity, or the first failure encountered.
        """
        verified = self.verifier.verify(credential)
        if not verified.allowed:
            return self._denied(verified)
        return await self.authorize(verified.value, permitted_roles)

    async def authorize(
        self,
        claims: Claims,
        permitted_roles: Iterable[Role],
    ) -> AccessOutcome[Identity]:
        """Gate the role of already verified claims, then resolve the identity.

        The gate runs first so a caller with a non-permitted role costs no
        read.
        """
        gated = RoleGate(permitted_roles).check(claims.role)
        if not gated.allowed:
            return self._denied(gated, claims.subject_id)

        resolved = await self.resolver.resolve(claims)
        if not resolved.allowed:
            return self._denied(resolved, claims.subject_id)

        logger.debug(
            "Identity resolved: subject=%s role=%s school=%s",
            claims.subject_id,
            claims.role.value,
            resolved.value.resolved_school_id,
        )
        return resolved

    def build_filter(self, identity: Identity, kind: ResourceKind) -> Predicate:
        return self.filters.build(identity, kind)

    async def can_access(
        self,
        identity: Identity,
        kind: ResourceKind,
        resource_id: str,
    ) -> bool:
        return await self.validator.can_access(identity, kind, resource_id)

    async def require_access(
        self,
        identity: Identity,
        kind: ResourceKind,
        resource_id: str,
    ) -> AccessOutcome[str]:
        """Like ``can_access`` but returns ``NOT_FOUND`` on refusal.

        Absent and out-of-scope resources produce the same outcome.
        """
        if await self.can_access(identity, kind, resource_id):
            return AccessOutcome.ok(resource_id)
        return self._denied(
            AccessOutcome.fail(
                AccessErrorKind.NOT_FOUND,
                f"{kind.value} {resource_id} absent or out of scope",
            ),
            identity.subject_id,
        )

    async def resolve_parent_schools(self, parent_id: str) -> frozenset[str]:
        return await self.schools.resolve(parent_id)

    async def with_parent_schools(self, identity: Identity) -> Identity:
        """Return the identity with its parent school set filled in.

        Identities of other roles are returned unchanged.
        """
        if not identity.is_parent or identity.tenant_school_ids is not None:
            return identity
        school_ids = await self.resolve_parent_schools(identity.subject_id)
        return dataclasses.replace(identity, tenant_school_ids=school_ids)

    @staticmethod
    def _denied(outcome: AccessOutcome, subject_id: str | None = None) -> AccessOutcome:
        logger.warning(
            "Access denied: reason=%s subject=%s detail=%s",
            outcome.error.value if outcome.error else None,
            subject_id,
            outcome.reason,
        )
        return outcome
