# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Response models for school data exposed through scoped endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SchoolSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    code: str
    city: str | None = None


class ClassSummary(BaseModel):
    """Class list entry.

    Attributes:
        id: Class id.
        school_id: Owning school.
        name: Class name.
        supervisor_id: Supervising teacher, if any.
        student_count: Students currently in the class.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    school_id: str
    name: str
    capacity: int
    supervisor_id: str | None = None
    student_count: int = 0


class LessonSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    subject_id: str
    teacher_id: str


class ClassDetail(ClassSummary):
    lessons: list[LessonSummary] = Field(default_factory=list)


class StudentSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    school_id: str
    class_id: str | None = None
    first_name: str
    last_name: str
    registration_number: str


class ParentLinkSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    parent_id: str
    relationship_type: str
    is_primary: bool


class StudentDetail(StudentSummary):
    primary_parent_id: str | None = None
    parents: list[ParentLinkSummary] = Field(default_factory=list)


class SubjectSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    school_id: str
    name: str


class SchoolOverview(BaseModel):
    """Headline counts for one school."""

    school: SchoolSummary
    student_count: int
    class_count: int
    teacher_count: int
    subject_count: int
    unassigned_student_count: int


class SearchHit(BaseModel):
    """One search result from a school-wide content table.

    Attributes:
        id: Row id.
        school_id: Owning school.
        class_id: Targeted class, if any.
        title: Title.
        snippet: Description or content, truncated.
        created_at: Creation time.
    """

    id: str
    school_id: str
    class_id: str | None = None
    title: str
    snippet: str | None = None
    created_at: datetime | None = None


class SearchResults(BaseModel):
    query: str
    school_ids: list[str]
    assignments: list[SearchHit] | None = None
    events: list[SearchHit] | None = None
    announcements: list[SearchHit] | None = None


class SchoolChildren(BaseModel):
    """One school with the caller's children enrolled there."""

    school: SchoolSummary
    children: list[StudentSummary] = Field(default_factory=list)


class ChildrenSummary(BaseModel):
    total_children: int
    schools_count: int


class ParentChildren(BaseModel):
    """A parent's children, flat and grouped by school.

    Attributes:
        children: Every linked child, ordered by school then name.
        children_by_school: The same children grouped under their school.
        summary: Child and school counts.
    """

    children: list[StudentSummary]
    children_by_school: list[SchoolChildren]
    summary: ChildrenSummary
