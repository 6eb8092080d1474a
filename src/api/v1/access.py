# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Identity endpoint.

- GET /me - Resolved identity of the caller
"""

from fastapi import APIRouter

from src.api.dependencies import Access, AnyRole
from src.models.auth import IdentityResponse

router = APIRouter()


@router.get(
    "/me",
    response_model=IdentityResponse,
    summary="Current identity",
    description="The caller's role and the school(s) it is scoped to.",
)
async def get_me(identity: AnyRole, access: Access) -> IdentityResponse:
    """Return the caller's identity.

    Staff get their profile school. Parents get the schools of their
    children instead of a single school.
    """
    identity = await access.with_parent_schools(identity)
    return IdentityResponse(
        subject_id=identity.subject_id,
        role=identity.role.value,
        school_id=identity.resolved_school_id,
        school_ids=sorted(identity.tenant_school_ids)
        if identity.tenant_school_ids is not None
        else None,
    )
