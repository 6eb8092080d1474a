# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exception handlers turning domain errors into HTTP responses.

``AccessDeniedError`` carries an error kind; the response status follows
the kind and the body never includes the internal reason. Out-of-scope and
absent resources share the same 404 body.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.domains.access.errors import AccessDeniedError, AccessErrorKind
from src.infrastructure.database.connection import DatabaseError

logger = logging.getLogger(__name__)


async def access_denied_handler(request: Request, exc: AccessDeniedError) -> JSONResponse:
    """Render an access denial.

    Args:
        request: HTTP request.
        exc: The denial.

    Returns:
        401, 403 or 404 JSON response.
    """
    headers = {}
    if exc.kind is AccessErrorKind.UNAUTHENTICATED:
        headers["WWW-Authenticate"] = "Bearer"

    logger.info(
        "Request refused: path=%s status=%d reason=%s",
        request.url.path,
        exc.status_code,
        exc.kind.value,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.public_message},
        headers=headers,
    )


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    logger.error("Database error on %s: %s", request.url.path, str(exc))
    return JSONResponse(
        status_code=503,
        content={"detail": "Database unavailable"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain exception handlers to ``app``."""
    app.add_exception_handler(AccessDeniedError, access_denied_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
