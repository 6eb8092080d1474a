# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Rate limiting middleware using slowapi.

Rate limits are applied per client: the verified subject id when a valid
credential was presented, the IP address otherwise.

Example:
    # Limit login attempts
    @limiter.limit(RATE_LIMIT_AUTH)
    async def login(request: Request, ...):
        ...
"""

import logging

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from src.core.config import get_settings

logger = logging.getLogger(__name__)


def get_client_identifier(request: Request) -> str:
    """Get a unique identifier for the client.

    Args:
        request: HTTP request.

    Returns:
        ``user:<id>`` when authenticated, ``ip:<address>`` otherwise.
    """
    claims = getattr(request.state, "claims", None)
    if claims is not None:
        return f"user:{claims.subject_id}"
    return f"ip:{get_remote_address(request)}"


def get_ip_only(request: Request) -> str:
    """Client IP address only, for endpoints called before authentication."""
    return get_remote_address(request)


# Create the limiter instance
settings = get_settings()
limiter = Limiter(
    key_func=get_client_identifier,
    default_limits=[f"{settings.rate_limit.requests_per_minute}/minute"],
    storage_uri=settings.rate_limit.storage_uri,
    enabled=settings.rate_limit.enabled,
)


async def rate_limit_exceeded_handler(
    request: Request,
    exc: RateLimitExceeded,
) -> Response:
    """Return 429 Too Many Requests with retry information.

    Args:
        request: HTTP request.
        exc: Rate limit exceeded exception.

    Returns:
        JSON response with error details.
    """
    logger.warning(
        "Rate limit exceeded: %s for %s",
        exc.detail,
        get_client_identifier(request),
    )

    return Response(
        content='{"detail": "Too many requests. Please try again later."}',
        status_code=429,
        media_type="application/json",
        headers={"Retry-After": "60"},
    )


# Common rate limit configurations
RATE_LIMIT_AUTH = "10/minute"  # Login and refresh attempts
RATE_LIMIT_SEARCH = "30/minute"  # Cross-school search
