# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy models for the shared multi-school schema."""

from src.infrastructure.database.models.base import Base
from src.infrastructure.database.models.content import Announcement, Assignment, Event
from src.infrastructure.database.models.school import Lesson, School, SchoolClass, Subject, subject_teachers
from src.infrastructure.database.models.student import Student, StudentParent
from src.infrastructure.database.models.user import Parent, Principal, SchoolAdmin, Teacher, User

__all__ = [
    "Base",
    "User",
    "SchoolAdmin",
    "Principal",
    "Teacher",
    "Parent",
    "School",
    "SchoolClass",
    "Subject",
    "Lesson",
    "subject_teachers",
    "Student",
    "StudentParent",
    "Assignment",
    "Event",
    "Announcement",
]
