# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

This package contains all v1 API endpoint definitions.
Each module provides a FastAPI router for a specific domain.

Modules:
    auth: Authentication endpoints (login, refresh).
    access: Resolved identity of the caller.
    parent: Parent portal endpoints (schools, children, cross-school search).
    teacher: Teacher endpoints (classes, students, subjects).
    principal: Principal endpoints (school overview).
    students: Scoped student reads.
    classes: Scoped class reads.
"""

from fastapi import APIRouter

from src.api.v1 import access, auth, classes, parent, principal, students, teacher

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

# Include domain routers
router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(access.router, tags=["Identity"])
router.include_router(parent.router, prefix="/parent", tags=["Parent"])
router.include_router(teacher.router, prefix="/teacher", tags=["Teacher"])
router.include_router(principal.router, prefix="/principal", tags=["Principal"])
router.include_router(students.router, prefix="/students", tags=["Students"])
router.include_router(classes.router, prefix="/classes", tags=["Classes"])

__all__ = ["router"]
