# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API middleware components.

- AuthMiddleware: bearer credential verification
- Rate limiting with slowapi
"""

from src.api.middleware.auth import PUBLIC_PATHS, AuthMiddleware, get_claims
from src.api.middleware.rate_limit import (
    RATE_LIMIT_AUTH,
    RATE_LIMIT_SEARCH,
    get_client_identifier,
    get_ip_only,
    limiter,
    rate_limit_exceeded_handler,
)

__all__ = [
    "AuthMiddleware",
    "PUBLIC_PATHS",
    "get_claims",
    "limiter",
    "get_client_identifier",
    "get_ip_only",
    "rate_limit_exceeded_handler",
    "RATE_LIMIT_AUTH",
    "RATE_LIMIT_SEARCH",
]
