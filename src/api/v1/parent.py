# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Parent portal API endpoints.

This module provides endpoints for parents, whose children may attend
several schools:
- GET /schools - Schools of the parent's children, each with those children
- GET /children - The parent's children, flat and grouped by school
- GET /search - Search assignments, events and announcements of those schools

Only parents can call these endpoints.
"""

import logging
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, Request, status

from src.api.dependencies import Access, DbSession, ParentIdentity
from src.api.middleware.rate_limit import RATE_LIMIT_SEARCH, limiter
from src.domains.access import ResourceKind, SchoolIn
from src.domains.parent.service import ParentService, SearchQueryTooShortError
from src.domains.school.service import SchoolService
from src.models.school import ParentChildren, SchoolChildren, SearchResults

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/schools",
    response_model=list[SchoolChildren],
    summary="List my children's schools",
)
async def list_parent_schools(
    identity: ParentIdentity,
    access: Access,
    db: DbSession,
) -> list[SchoolChildren]:
    """Schools of every linked child, each listed once with those children."""
    school_ids = await access.resolve_parent_schools(identity.subject_id)
    schools = await SchoolService(db).list_schools(SchoolIn(school_ids))
    grouped = await ParentService(db).list_children_by_school(
        access.build_filter(identity, ResourceKind.STUDENT)
    )

    children = {group.school.id: group.children for group in grouped.children_by_school}
    return [SchoolChildren(school=school, children=children.get(school.id, [])) for school in schools]


@router.get(
    "/children",
    response_model=ParentChildren,
    summary="List my children",
)
async def list_parent_children(
    identity: ParentIdentity,
    access: Access,
    db: DbSession,
) -> ParentChildren:
    """Children linked to the parent by any relationship, grouped by school."""
    scope = access.build_filter(identity, ResourceKind.STUDENT)
    return await ParentService(db).list_children_by_school(scope)


@router.get(
    "/search",
    response_model=SearchResults,
    summary="Search across my children's schools",
)
@limiter.limit(RATE_LIMIT_SEARCH)
async def search_across_schools(
    request: Request,
    identity: ParentIdentity,
    access: Access,
    db: DbSession,
    query: str = Query("", description="Text to search, at least 2 characters"),
    search_type: Literal["assignments", "events", "announcements"] | None = Query(
        None, alias="type", description="Restrict to one content type"
    ),
) -> SearchResults:
    """Search school-wide content in exactly the parent's schools.

    A school claim in the token is ignored; the school set is derived from
    the parent's children.

    Raises:
        HTTPException: 400 if the query is too short.
    """
    school_ids = await access.resolve_parent_schools(identity.subject_id)

    try:
        return await ParentService(db).search(school_ids, query, search_type)
    except SearchQueryTooShortError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        )
