# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""JWT token management utilities.

This module provides JWT token creation and validation using python-jose.
Supports access tokens and refresh tokens with configurable expiration.

Access tokens carry ``sub`` and ``role``. Staff tokens may also carry
``school_id`` and ``tenant_id``; these are advisory and are never used for
scoping, since a staff member can be moved to another school while an old
token is still valid.

Example:
    >>> from src.core.config import get_settings
    >>> jwt_manager = JWTManager(get_settings().jwt)
    >>> tokens = jwt_manager.create_token_pair(user_id="user-123", role="TEACHER")
    >>> claims = jwt_manager.decode_token(tokens.access_token, expected_type="access")
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Literal
from uuid import UUID

from jose import ExpiredSignatureError, JWTError as JoseJWTError, jwt
from pydantic import BaseModel, ValidationError

from src.core.config.settings import JWTSettings, get_settings

logger = logging.getLogger(__name__)


class TokenPayload(BaseModel):
    """JWT token payload structure.

    Attributes:
        sub: Subject (user ID).
        type: Token type (access or refresh).
        role: Role code. Absent on refresh tokens.
        school_id: Advisory school claim for staff.
        tenant_id: Advisory tenant claim for staff.
        exp: Expiration timestamp.
        iat: Issued at timestamp.
        jti: JWT ID for token tracking.
    """

    sub: str
    type: Literal["access", "refresh"]
    role: str | None = None
    school_id: str | None = None
    tenant_id: str | None = None
    exp: int
    iat: int
    jti: str


class TokenPair(BaseModel):
    """Access and refresh token pair.

    Attributes:
        access_token: JWT access token string.
        refresh_token: JWT refresh token string.
        token_type: Token type (always "Bearer").
        expires_in: Access token expiration in seconds.
        refresh_expires_in: Refresh token expiration in seconds.
    """

    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: int
    refresh_expires_in: int


class JWTError(Exception):
    """Base exception for JWT operations."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is malformed, wrongly signed or of the wrong type."""

    pass


class JWTManager:
    """JWT token creation and validation manager.

    Attributes:
        _settings: JWT configuration settings.

    Example:
        >>> jwt_manager = JWTManager(settings.jwt)
        >>> tokens = jwt_manager.create_token_pair(
        ...     user_id="user-123",
        ...     role="SCHOOL_ADMIN",
        ...     school_id="school-1",
        ... )
        >>> claims = jwt_manager.decode_token(tokens.access_token)
    """

    def __init__(self, settings: JWTSettings | None = None) -> None:
        """Initialize the JWT manager.

        Args:
            settings: JWT configuration settings. Defaults to the application
                settings.
        """
        self._settings = settings or get_settings().jwt

    def create_token_pair(
        self,
        user_id: str | UUID,
        role: str,
        school_id: str | UUID | None = None,
        tenant_id: str | UUID | None = None,
    ) -> TokenPair:
        """Create an access and refresh token pair.

        Args:
            user_id: User identifier.
            role: Role code.
            school_id: Advisory school id for staff.
            tenant_id: Advisory tenant id for staff.

        Returns:
            TokenPair with access and refresh tokens.
        """
        now = datetime.now(timezone.utc)
        refresh_exp = now + timedelta(days=self._settings.refresh_token_expire_days)

        access_token = self.create_access_token(
            user_id=user_id,
            role=role,
            school_id=school_id,
            tenant_id=tenant_id,
            now=now,
        )

        # Refresh tokens carry no role; it is re-read from the user on refresh
        refresh_payload = {
            "sub": str(user_id),
            "type": "refresh",
            "exp": int(refresh_exp.timestamp()),
            "iat": int(now.timestamp()),
            "jti": secrets.token_urlsafe(16),
        }
        refresh_token = self._encode(refresh_payload)

        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            token_type="Bearer",
            expires_in=self._settings.access_token_expire_minutes * 60,
            refresh_expires_in=self._settings.refresh_token_expire_days * 24 * 60 * 60,
        )

    def create_access_token(
        self,
        user_id: str | UUID,
        role: str,
        school_id: str | UUID | None = None,
        tenant_id: str | UUID | None = None,
        now: datetime | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create an access token.

        Args:
            user_id: User identifier.
            role: Role code.
            school_id: Advisory school id.
            tenant_id: Advisory tenant id.
            now: Issue time. Defaults to the current time.
            expires_delta: Lifetime override. Defaults to the configured
                access token lifetime.

        Returns:
            JWT access token string.
        """
        now = now or datetime.now(timezone.utc)
        exp = now + (expires_delta or timedelta(minutes=self._settings.access_token_expire_minutes))

        payload = {
            "sub": str(user_id),
            "type": "access",
            "role": role,
            "school_id": str(school_id) if school_id else None,
            "tenant_id": str(tenant_id) if tenant_id else None,
            "exp": int(exp.timestamp()),
            "iat": int(now.timestamp()),
            "jti": secrets.token_urlsafe(16),
        }
        return self._encode(payload)

    def decode_token(
        self,
        token: str,
        expected_type: Literal["access", "refresh"] | None = None,
    ) -> TokenPayload:
        """Decode and validate a JWT token.

        Args:
            token: JWT token string.
            expected_type: Expected token type (access or refresh).

        Returns:
            TokenPayload with decoded claims.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid or wrong type.
        """
        try:
            payload = jwt.decode(
                token,
                self._settings.secret_key.get_secret_value(),
                algorithms=[self._settings.algorithm],
            )
        except ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except JoseJWTError as e:
            logger.warning("Token decode failed: %s", str(e))
            raise InvalidTokenError(f"Invalid token: {str(e)}")

        if expected_type and payload.get("type") != expected_type:
            raise InvalidTokenError(
                f"Expected {expected_type} token, got {payload.get('type')}"
            )

        try:
            return TokenPayload.model_validate(payload)
        except ValidationError as e:
            logger.warning("Token claims invalid: %s", str(e))
            raise InvalidTokenError("Invalid token: missing or malformed claims")

    def _encode(self, payload: dict) -> str:
        return jwt.encode(
            payload,
            self._settings.secret_key.get_secret_value(),
            algorithm=self._settings.algorithm,
        )
