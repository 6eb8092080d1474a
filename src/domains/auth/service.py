# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication service issuing bearer credentials.

This module provides the AuthService that orchestrates:
- Email and password login (bcrypt)
- Access token refresh

Issued access tokens carry ``sub`` and ``role``. Staff tokens also carry the
profile school as an advisory ``school_id`` claim; the access layer re-reads
the profile on every request and never trusts that claim for scoping.

Example:
    >>> auth_service = AuthService(db_session, jwt_manager, SqlAccessRepository(db_session))
    >>> tokens = await auth_service.login("admin@school.test", "secret")
    >>> tokens = await auth_service.refresh(tokens.refresh_token)
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.access.repository import AccessRepository
from src.domains.access.roles import Role
from src.domains.auth.jwt import JWTError, JWTManager, TokenPair
from src.domains.auth.password import PasswordHasher
from src.infrastructure.database.models import User

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Base exception for authentication errors."""

    pass


class InvalidCredentialsError(AuthenticationError):
    """Raised when email or password is wrong."""

    pass


class AccountInactiveError(AuthenticationError):
    """Raised when account is not active."""

    pass


class TokenRefreshError(AuthenticationError):
    """Raised when token refresh fails."""

    pass


class AuthService:
    """Authentication service for login and refresh.

    Attributes:
        _db: Database session for queries.
        _jwt_manager: JWT token manager.
        _repository: Profile lookups for the advisory school claim.
        _hasher: Password hasher.
    """

    def __init__(
        self,
        db: AsyncSession,
        jwt_manager: JWTManager,
        repository: AccessRepository,
        hasher: PasswordHasher | None = None,
    ) -> None:
        """Initialize the authentication service.

        Args:
            db: Async database session.
            jwt_manager: JWT token manager.
            repository: Access lookups, used to find the staff school.
            hasher: Password hasher. Defaults to bcrypt with 12 rounds.
        """
        self._db = db
        self._jwt_manager = jwt_manager
        self._repository = repository
        self._hasher = hasher or PasswordHasher()

    async def login(self, email: str, password: str) -> TokenPair:
        """Verify email and password and issue a token pair.

        Args:
            email: Account email (case-insensitive).
            password: Plain text password.

        Returns:
            Access and refresh tokens.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password
                does not match.
            AccountInactiveError: If the account is disabled.
        """
        user = await self._get_user_by_email(email)

        if user is None:
            self._hasher.burn(password)
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsError("Invalid email or password")

        if not self._hasher.verify(password, user.password_hash):
            logger.info("Login failed: wrong password for user %s", user.id)
            raise InvalidCredentialsError("Invalid email or password")

        if not user.is_active:
            raise AccountInactiveError("Account is disabled")

        tokens = await self._issue(user)
        logger.info("User logged in: %s (%s)", user.id, user.role)
        return tokens

    async def refresh(self, refresh_token: str) -> TokenPair:
        """Issue a new token pair from a refresh token.

        The user is re-read so a role change or deactivation since the last
        login takes effect immediately.

        Args:
            refresh_token: Refresh token from a previous login.

        Returns:
            New access and refresh tokens.

        Raises:
            TokenRefreshError: If the refresh token is invalid or expired, or
                the user is gone or inactive.
        """
        try:
            payload = self._jwt_manager.decode_token(refresh_token, expected_type="refresh")
        except JWTError as e:
            raise TokenRefreshError(f"Invalid refresh token: {str(e)}")

        result = await self._db.execute(select(User).where(User.id == payload.sub))
        user = result.scalar_one_or_none()

        if user is None or not user.is_active:
            raise TokenRefreshError("User not found or inactive")

        tokens = await self._issue(user)
        logger.info("Tokens refreshed for user: %s", user.id)
        return tokens

    async def _get_user_by_email(self, email: str) -> User | None:
        stmt = select(User).where(func.lower(User.email) == email.strip().lower())
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def _issue(self, user: User) -> TokenPair:
        role = Role.parse(user.role)
        if role is None:
            logger.error("User %s has unknown role %r", user.id, user.role)
            raise InvalidCredentialsError("Invalid email or password")

        school_id = None
        if role.is_school_scoped:
            school_id = await self._repository.get_staff_school_id(role, user.id)

        return self._jwt_manager.create_token_pair(
            user_id=user.id,
            role=role.value,
            school_id=school_id,
            tenant_id=school_id,
        )
