# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Parent Service - multi-school reads for parents.

A parent's children may attend several schools. This service groups the
children under their schools and searches the school-wide content tables
(assignments, events, announcements) of exactly those schools. The school
set comes from the parent's links, never from a school claim in the token.
"""

import logging
from typing import Literal

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.access.predicates import Predicate, ResourceKind, SchoolIn
from src.infrastructure.database.models import Announcement, Assignment, Event, School, Student
from src.infrastructure.database.scoping import apply_scope
from src.models.school import (
    ChildrenSummary,
    ParentChildren,
    SchoolChildren,
    SchoolSummary,
    SearchHit,
    SearchResults,
    StudentSummary,
)

logger = logging.getLogger(__name__)

SearchType = Literal["assignments", "events", "announcements"]

MIN_QUERY_LENGTH = 2
RESULTS_PER_TYPE = 10
SNIPPET_LENGTH = 200

# (resource kind, model, body column name) per search type
_SEARCH_TARGETS = {
    "assignments": (ResourceKind.ASSIGNMENT, Assignment, "description"),
    "events": (ResourceKind.EVENT, Event, "description"),
    "announcements": (ResourceKind.ANNOUNCEMENT, Announcement, "content"),
}


class ParentServiceError(Exception):
    """Exception raised for parent service operations."""

    def __init__(
        self,
        message: str,
        code: str = "parent_error",
        original_error: Exception | None = None,
    ):
        self.message = message
        self.code = code
        self.original_error = original_error
        super().__init__(self.message)


class SearchQueryTooShortError(ParentServiceError):
    """Raised when the search query is shorter than the minimum length."""

    def __init__(self, query: str):
        super().__init__(
            message=f"Search query must be at least {MIN_QUERY_LENGTH} characters",
            code="query_too_short",
        )
        self.query = query


class ParentService:
    """Service for parent-specific reads.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_children_by_school(self, scope: Predicate) -> ParentChildren:
        """List the children inside ``scope`` grouped by their school.

        Args:
            scope: Row scope for ``ResourceKind.STUDENT``, normally the
                parent's ``ParentScoped`` filter.

        Returns:
            Children flat and per school, schools ordered by name.
        """
        stmt = apply_scope(
            select(Student, School).join(School, School.id == Student.school_id),
            ResourceKind.STUDENT,
            scope,
        ).order_by(School.name, Student.last_name, Student.first_name)
        result = await self.db.execute(stmt)

        children: list[StudentSummary] = []
        groups: dict[str, SchoolChildren] = {}
        for student, school in result.all():
            child = StudentSummary.model_validate(student)
            children.append(child)
            group = groups.get(school.id)
            if group is None:
                group = groups[school.id] = SchoolChildren(
                    school=SchoolSummary.model_validate(school)
                )
            group.children.append(child)

        logger.info(
            "Parent children retrieved: children=%d schools=%d",
            len(children),
            len(groups),
        )
        return ParentChildren(
            children=children,
            children_by_school=list(groups.values()),
            summary=ChildrenSummary(total_children=len(children), schools_count=len(groups)),
        )

    async def search(
        self,
        school_ids: frozenset[str],
        query: str,
        search_type: SearchType | None = None,
    ) -> SearchResults:
        """Search school-wide content in the given schools.

        Args:
            school_ids: The parent's resolved schools.
            query: Text matched case-insensitively against title and body.
            search_type: Restrict to one content type. None searches all.

        Returns:
            Up to ten hits per searched type. Types not searched are None.

        Raises:
            SearchQueryTooShortError: If the query is too short.
        """
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            raise SearchQueryTooShortError(query)

        results = SearchResults(query=query, school_ids=sorted(school_ids))
        scope = SchoolIn(frozenset(school_ids))

        for name, (kind, model, body_column) in _SEARCH_TARGETS.items():
            if search_type is not None and search_type != name:
                continue
            hits = await self._search_table(kind, model, body_column, scope, query)
            setattr(results, name, hits)

        logger.info(
            "Multi-school search performed: type=%s schools=%d",
            search_type or "all",
            len(school_ids),
        )
        return results

    async def _search_table(
        self,
        kind: ResourceKind,
        model: type,
        body_column: str,
        scope: SchoolIn,
        query: str,
    ) -> list[SearchHit]:
        pattern = f"%{query}%"
        body = getattr(model, body_column)
        stmt = (
            select(model)
            .where(or_(model.title.ilike(pattern), body.ilike(pattern)))
            .order_by(model.created_at.desc())
            .limit(RESULTS_PER_TYPE)
        )
        stmt = apply_scope(stmt, kind, scope)
        result = await self.db.execute(stmt)

        return [
            SearchHit(
                id=row.id,
                school_id=row.school_id,
                class_id=row.class_id,
                title=row.title,
                snippet=(getattr(row, body_column) or "")[:SNIPPET_LENGTH] or None,
                created_at=row.created_at,
            )
            for row in result.scalars().all()
        ]
