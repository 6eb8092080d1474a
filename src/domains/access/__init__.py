# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Access domain package.

Authorization and tenant isolation:
- Credential verification and the role gate
- Identity resolution from staff and parent profiles
- Tenant filter predicates for list queries
- Relationship checks for single resources
- Multi-school resolution for parents
"""

from src.domains.access.credentials import Claims, CredentialVerifier
from src.domains.access.errors import AccessDeniedError, AccessErrorKind, AccessOutcome
from src.domains.access.filters import TenantFilterBuilder
from src.domains.access.identity import Identity, IdentityResolver
from src.domains.access.policies import (
    AccessPolicy,
    ParentPolicy,
    PolicyContext,
    PolicyRegistry,
    SchoolStaffPolicy,
    SuperAdminPolicy,
    TeacherPolicy,
    get_policy_registry,
)
from src.domains.access.predicates import (
    Nothing,
    ParentSchools,
    ParentScoped,
    Predicate,
    ResourceKind,
    SchoolEquals,
    SchoolIn,
    TeacherScoped,
    Unrestricted,
)
from src.domains.access.repository import AccessRepository, ClassRelation
from src.domains.access.roles import (
    ALL_ROLES,
    SCHOOL_MANAGEMENT_ROLES,
    SCHOOL_SCOPED_ROLES,
    Role,
    RoleGate,
)
from src.domains.access.schools import MultiSchoolResolver, RequestScopedSchoolCache
from src.domains.access.service import AccessService
from src.domains.access.validator import RelationshipAccessValidator

__all__ = [
    # Roles
    "Role",
    "RoleGate",
    "ALL_ROLES",
    "SCHOOL_MANAGEMENT_ROLES",
    "SCHOOL_SCOPED_ROLES",
    # Errors
    "AccessDeniedError",
    "AccessErrorKind",
    "AccessOutcome",
    # Identity
    "Claims",
    "CredentialVerifier",
    "Identity",
    "IdentityResolver",
    # Predicates
    "Predicate",
    "ResourceKind",
    "Unrestricted",
    "Nothing",
    "SchoolEquals",
    "SchoolIn",
    "ParentSchools",
    "TeacherScoped",
    "ParentScoped",
    # Policies
    "AccessPolicy",
    "PolicyContext",
    "PolicyRegistry",
    "SuperAdminPolicy",
    "SchoolStaffPolicy",
    "TeacherPolicy",
    "ParentPolicy",
    "get_policy_registry",
    # Components
    "AccessRepository",
    "ClassRelation",
    "TenantFilterBuilder",
    "RelationshipAccessValidator",
    "MultiSchoolResolver",
    "RequestScopedSchoolCache",
    "AccessService",
]
