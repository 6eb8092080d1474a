# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication API endpoints.

This module provides endpoints for user authentication:
- POST /login - Exchange email and password for a token pair
- POST /refresh - Refresh access token

Example:
    POST /api/v1/auth/login
    Body:
        {"email": "principal@school.test", "password": "..."}
"""

import logging

from fastapi import APIRouter, HTTPException, Request, status

from src.api.dependencies import Auth
from src.api.middleware.rate_limit import RATE_LIMIT_AUTH, get_ip_only, limiter
from src.domains.auth.service import (
    AccountInactiveError,
    InvalidCredentialsError,
    TokenRefreshError,
)
from src.models.auth import LoginRequest, RefreshRequest, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Log in",
    description="Verify email and password and issue access and refresh tokens.",
)
@limiter.limit(RATE_LIMIT_AUTH, key_func=get_ip_only)
async def login(
    request: Request,
    data: LoginRequest,
    auth_service: Auth,
) -> TokenResponse:
    """Log in with email and password.

    Args:
        request: HTTP request (used for rate limiting).
        data: Login credentials.
        auth_service: Authentication service.

    Returns:
        Token pair.

    Raises:
        HTTPException: 401 on wrong credentials, 403 on disabled account.
    """
    try:
        tokens = await auth_service.login(data.email, data.password)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except AccountInactiveError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is disabled",
        )

    return TokenResponse.model_validate(tokens)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Refresh access token",
    description="Get a new token pair using a refresh token. Role changes apply immediately.",
)
@limiter.limit(RATE_LIMIT_AUTH, key_func=get_ip_only)
async def refresh_token(
    request: Request,
    data: RefreshRequest,
    auth_service: Auth,
) -> TokenResponse:
    """Refresh the access token.

    Raises:
        HTTPException: 401 if the refresh token is invalid or the user is
            gone or inactive.
    """
    try:
        tokens = await auth_service.refresh(data.refresh_token)
    except TokenRefreshError as e:
        logger.info("Token refresh refused: %s", str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return TokenResponse.model_validate(tokens)
