# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
Dependencies are used to:
- Get database sessions from the ``Database`` handle on ``app.state``
- Resolve the caller's identity for the roles a route permits
- Get service instances

Example:
    @router.get("/students")
    async def list_students(
        db: DbSession,
        identity: Identity = Depends(require_roles(Role.SCHOOL_ADMIN, Role.PRINCIPAL)),
    ):
        ...
"""

import logging
from dataclasses import dataclass
from typing import Annotated, AsyncGenerator, Awaitable, Callable

from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.middleware.auth import get_claims
from src.core.config import get_settings
from src.domains.access import (
    ALL_ROLES,
    SCHOOL_MANAGEMENT_ROLES,
    AccessDeniedError,
    AccessErrorKind,
    AccessService,
    Claims,
    Identity,
    Role,
    RoleGate,
)
from src.domains.auth.jwt import JWTManager
from src.domains.auth.password import PasswordHasher
from src.domains.auth.service import AuthService
from src.infrastructure.database import Database, DatabaseError, SqlAccessRepository

logger = logging.getLogger(__name__)


# =========================================================================
# Database Dependencies
# =========================================================================


def get_database(request: Request) -> Database:
    """Get the database handle created in the application lifespan.

    Raises:
        DatabaseError: If the application has no connected database.
    """
    database: Database | None = getattr(request.app.state, "database", None)
    if database is None:
        raise DatabaseError("Database not configured on application state")
    return database


async def get_db(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """Get a database session for the request.

    Yields:
        AsyncSession, committed on success and rolled back on error.
    """
    async with database.session() as session:
        yield session


# =========================================================================
# Service Dependencies
# =========================================================================


def get_jwt_manager() -> JWTManager:
    """Get JWT manager instance."""
    settings = get_settings()
    return JWTManager(settings.jwt)


def get_password_hasher() -> PasswordHasher:
    return PasswordHasher()


async def get_access_service(
    db: AsyncSession = Depends(get_db),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
) -> AccessService:
    """Get a request-scoped AccessService.

    Args:
        db: Request database session.
        jwt_manager: JWT manager.

    Returns:
        AccessService backed by the SQL access repository.
    """
    return AccessService(SqlAccessRepository(db), jwt_manager)


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthService:
    """Get AuthService instance."""
    return AuthService(db, jwt_manager, SqlAccessRepository(db), hasher)


# =========================================================================
# Access Dependencies
# =========================================================================


def require_roles(*roles: Role) -> Callable[..., Awaitable[Identity]]:
    """Build the dependency declaring the roles a route permits.

    Missing or invalid credentials give 401 and a role outside the set gives
    403, both before a database session is opened. A missing backing profile
    gives 403 once the identity is resolved.

    Args:
        roles: Permitted roles (any of these).

    Returns:
        Dependency returning the caller's ``Identity``.

    Example:
        @router.get("/teacher/classes")
        async def my_classes(
            identity: Identity = Depends(require_roles(Role.TEACHER)),
        ):
            ...
    """
    gate = RoleGate(roles)

    def gated_claims(request: Request) -> Claims:
        claims = get_claims(request)
        if claims is None:
            reason = getattr(request.state, "auth_error", None) or "missing credential"
            logger.warning("Access denied: reason=unauthenticated detail=%s", reason)
            raise AccessDeniedError(AccessErrorKind.UNAUTHENTICATED, reason)

        gated = gate.check(claims.role)
        if not gated.allowed:
            logger.warning(
                "Access denied: reason=forbidden subject=%s detail=%s",
                claims.subject_id,
                gated.reason,
            )
        gated.unwrap()
        return claims

    # ``gated_claims`` must stay ahead of ``access``: sub-dependencies resolve
    # in declaration order
    async def resolve_identity(
        claims: Claims = Depends(gated_claims),
        access: AccessService = Depends(get_access_service),
    ) -> Identity:
        outcome = await access.authorize(claims, gate.permitted_roles)
        return outcome.unwrap()

    return resolve_identity


@dataclass(frozen=True)
class Pagination:
    limit: int
    offset: int


def get_pagination(
    limit: int | None = Query(None, ge=1, description="Page size"),
    offset: int = Query(0, ge=0, description="Rows to skip"),
) -> Pagination:
    """Page parameters, clamped to the configured maximum page size."""
    api = get_settings().api
    return Pagination(limit=min(limit or api.default_page_size, api.max_page_size), offset=offset)


# =========================================================================
# Type aliases for cleaner endpoint signatures
# =========================================================================

DbSession = Annotated[AsyncSession, Depends(get_db)]
Access = Annotated[AccessService, Depends(get_access_service)]
Auth = Annotated[AuthService, Depends(get_auth_service)]
Page = Annotated[Pagination, Depends(get_pagination)]

AnyRole = Annotated[Identity, Depends(require_roles(*ALL_ROLES))]
SchoolManager = Annotated[Identity, Depends(require_roles(*SCHOOL_MANAGEMENT_ROLES))]
TeacherIdentity = Annotated[Identity, Depends(require_roles(Role.TEACHER))]
ParentIdentity = Annotated[Identity, Depends(require_roles(Role.PARENT))]
PrincipalIdentity = Annotated[Identity, Depends(require_roles(Role.PRINCIPAL))]
