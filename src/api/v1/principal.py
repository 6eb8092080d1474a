# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Principal API endpoints.

- GET /overview - Headline counts for the principal's school
"""

import logging

from fastapi import APIRouter, HTTPException, status

from src.api.dependencies import DbSession, PrincipalIdentity
from src.domains.school.service import SchoolNotFoundError, SchoolService
from src.models.school import SchoolOverview

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/overview",
    response_model=SchoolOverview,
    summary="School overview",
)
async def get_school_overview(identity: PrincipalIdentity, db: DbSession) -> SchoolOverview:
    """Counts for the school of the principal's profile, never the token's.

    Raises:
        HTTPException: 404 if the profile's school no longer exists.
    """
    try:
        return await SchoolService(db).get_overview(identity.resolved_school_id)
    except SchoolNotFoundError as e:
        logger.warning(
            "Overview school missing: principal=%s school=%s",
            identity.subject_id,
            identity.resolved_school_id,
        )
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
